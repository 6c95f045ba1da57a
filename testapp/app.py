"""
Demo service for table_filtering.
A small Flask app serving sample outreach targets with filter, sort,
facet-count and CSV export endpoints.

Run with: python -m testapp.app
"""

import logging
import os

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from table_filtering import (
    CodecError,
    JsonFileStore,
    MemoryStore,
    TableFilterEngine,
    configure_logging,
    find_column,
    filter_value_from_dict,
    to_dataframe,
)
from testapp.data import COLUMNS, build_targets

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = 'outreach-targets'


def _default_store():
    path = os.getenv('FILTER_STORE_PATH')
    return JsonFileStore(path) if path else MemoryStore()


def create_app(store=None, clock=None, data=None):
    """
    Build the Flask app.

    Args:
        store: Key-value store for filter state (default from FILTER_STORE_PATH)
        clock: Callable returning "now" for date presets (default datetime.now)
        data: Records to serve (default: sample outreach targets)
    """
    app = Flask(__name__)

    engine_kwargs = {'scope': os.getenv('FILTER_SCOPE', DEFAULT_SCOPE),
                     'store': store if store is not None else _default_store()}
    if clock is not None:
        engine_kwargs['clock'] = clock
    engine = TableFilterEngine(COLUMNS, **engine_kwargs)
    rows = data if data is not None else build_targets(clock() if clock else None)

    app.config['ENGINE'] = engine
    app.config['ROWS'] = rows

    def _column_or_404(column_id):
        if find_column(COLUMNS, column_id) is None:
            return jsonify({'error': f'Unknown column: {column_id}'}), 404
        return None

    def _data_state():
        """Return all rows annotated with _visible, plus filter state. Used by all mutation routes."""
        view = engine.view(rows)
        visible_ids = {row['id'] for row in view.filtered_data}
        return {
            'data': [{**row, '_visible': row['id'] in visible_ids} for row in rows],
            'total': view.total,
            'filtered': view.filtered,
            'filters': [f.to_dict() for f in view.active_filters],
            'sort': (
                {'column_id': view.sort_config.column_id, 'direction': view.sort_config.direction}
                if view.sort_config else None
            ),
        }

    def _column_request():
        """Read the JSON body once. Returns (body, column_id, error_response)."""
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            return None, None, (jsonify({'error': 'Request body must be a JSON object'}), 400)
        column_id = body.get('column_id')
        if not isinstance(column_id, str) or not column_id:
            return None, None, (jsonify({'error': 'No column_id provided'}), 400)
        missing = _column_or_404(column_id)
        if missing:
            return None, None, missing
        return body, column_id, None

    # --- Data ---

    @app.route('/api/data')
    def get_data():
        return jsonify(_data_state())

    @app.route('/api/rows')
    def get_rows():
        return jsonify(engine.apply(rows))

    @app.route('/api/columns')
    def get_columns():
        return jsonify([
            {
                **col.describe(),
                'counts': engine.get_counts(rows, col.id),
                'sort_direction': engine.get_sort_direction(col.id),
            }
            for col in COLUMNS
        ])

    @app.route('/api/export.csv')
    def export_csv():
        df = to_dataframe(engine.apply(rows), COLUMNS)
        return Response(df.to_csv(index=False), mimetype='text/csv',
                        headers={'Content-Disposition': 'attachment; filename=outreach-targets.csv'})

    # --- Filters ---

    @app.route('/api/filter/set', methods=['POST'])
    def set_filter():
        body, column_id, error = _column_request()
        if error:
            return error

        raw_value = body.get('value')
        try:
            value = filter_value_from_dict(raw_value) if raw_value is not None else None
        except CodecError as e:
            return jsonify({'error': str(e)}), 400

        if not engine.set_filter(column_id, value):
            return jsonify({'error': f'Filter does not fit column {column_id}'}), 400
        return jsonify(_data_state())

    @app.route('/api/filter/clear', methods=['POST'])
    def clear_filter():
        _, column_id, error = _column_request()
        if error:
            return error
        engine.clear_filter(column_id)
        return jsonify(_data_state())

    @app.route('/api/filter/clear_all', methods=['POST'])
    def clear_all_filters():
        engine.clear_all_filters()
        return jsonify(_data_state())

    # --- Sort ---

    @app.route('/api/sort/toggle', methods=['POST'])
    def toggle_sort():
        _, column_id, error = _column_request()
        if error:
            return error
        if not find_column(COLUMNS, column_id).sortable:
            return jsonify({'error': f'Column {column_id} is not sortable'}), 400
        engine.toggle_sort(column_id)
        return jsonify(_data_state())

    @app.route('/api/sort/set', methods=['POST'])
    def set_sort():
        body, column_id, error = _column_request()
        if error:
            return error
        direction = body.get('direction')
        if not engine.set_sort(column_id, direction):
            return jsonify({'error': f'Cannot sort {column_id} {direction}'}), 400
        return jsonify(_data_state())

    @app.route('/api/reset', methods=['POST'])
    def reset():
        engine.reset()
        return jsonify(_data_state())

    return app


if __name__ == '__main__':
    configure_logging()
    port = int(os.getenv('PORT', '5003'))
    app = create_app()
    logger.info("Demo app running at http://localhost:%d", port)
    logger.info("Loaded %d sample records", len(app.config['ROWS']))
    app.run(debug=True, port=port)
