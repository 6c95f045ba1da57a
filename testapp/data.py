"""
Sample dataset for the table_filtering demo service.
Simulates the outreach targets of one deal - small enough to reason about,
rich enough to exercise every filter kind.
"""

from datetime import datetime, timedelta

from table_filtering import ColumnDef, DatePreset, EnumOption, FilterKind, STANDARD_DATE_PRESETS


def _days_ago(days, now=None):
    if days is None:
        return None
    return ((now or datetime.now()) - timedelta(days=days)).isoformat(timespec='seconds')


# (id, organization, contact, stage, warmth, commitment in cents, days since last contact, next task)
_TARGETS = [
    (1,  "Acme Capital",       "Ada Park",       "committed",  3, 250000000, 0,    "Send wire instructions"),
    (2,  "Birchwood Partners", "Ben Ortiz",      "engaged",    2, 75000000,  2,    "Share data room"),
    (3,  "Cobalt Ventures",    "Chloé Martin",   "contacted",  1, None,      9,    None),
    (4,  "Dunmore Family",     "Dev Shah",       "identified", 0, None,      None, None),
    (5,  "Elm Street Fund",    "Emma Stone",     "engaged",    2, 120000000, 1,    "Follow-up call"),
    (6,  "Foxglove LP",        "Farid Haddad",   "passed",     0, None,      30,   None),
    (7,  "Granite Holdings",   "Grace Liu",      "committed",  3, 50000000,  12,   None),
    (8,  "Harbor Point",       "Hank Müller",    "contacted",  1, None,      4,    "Intro email"),
    (9,  "Ironleaf Group",     "Ivy Chen",       "identified", 0, None,      None, "Find warm intro"),
    (10, "Juniper Road",       "Jack O'Neil",    "engaged",    2, 30000000,  8,    None),
]

WARMTH_LABELS = {0: "Cold", 1: "Warm", 2: "Hot", 3: "Champion"}


def build_targets(now=None):
    """Build the sample records with contact dates relative to `now`."""
    return [
        {
            "id": target_id,
            "organization": organization,
            "contact": contact,
            "stage": stage,
            "warmth": warmth,
            "commitment_cents": commitment,
            "last_contacted_at": _days_ago(days, now),
            "next_task": next_task,
        }
        for target_id, organization, contact, stage, warmth, commitment, days, next_task in _TARGETS
    ]


STAGE_OPTIONS = (
    EnumOption("identified", "Identified", "slate"),
    EnumOption("contacted", "Contacted", "blue"),
    EnumOption("engaged", "Engaged", "amber"),
    EnumOption("committed", "Committed", "green"),
    EnumOption("passed", "Passed", "red"),
)

WARMTH_OPTIONS = tuple(EnumOption(str(k), v) for k, v in WARMTH_LABELS.items())

CONTACT_PRESETS = STANDARD_DATE_PRESETS[:3] + (DatePreset("never", "Never contacted"),)

COLUMNS = [
    ColumnDef(
        id="organization", label="Organization", filter_kind=FilterKind.TEXT,
        accessor=lambda row: row["organization"],
    ),
    ColumnDef(
        id="contact", label="Contact", filter_kind=FilterKind.TEXT,
        accessor=lambda row: row["contact"],
    ),
    ColumnDef(
        id="stage", label="Stage", filter_kind=FilterKind.ENUM,
        accessor=lambda row: row["stage"],
        enum_options=STAGE_OPTIONS,
    ),
    ColumnDef(
        id="warmth", label="Warmth", filter_kind=FilterKind.ENUM,
        accessor=lambda row: str(row["warmth"]),
        sort_accessor=lambda row: row["warmth"],
        enum_options=WARMTH_OPTIONS,
        sort_labels=("Cold → Hot", "Hot → Cold"),
    ),
    ColumnDef(
        id="commitment", label="Commitment", filter_kind=FilterKind.RANGE,
        accessor=lambda row: row["commitment_cents"],
        range_format="currency",
        sort_labels=("Low → High", "High → Low"),
    ),
    ColumnDef(
        id="last_contacted", label="Last contacted", filter_kind=FilterKind.DATE_PRESET,
        accessor=lambda row: row["last_contacted_at"],
        date_presets=CONTACT_PRESETS,
        sort_labels=("Oldest first", "Newest first"),
    ),
    ColumnDef(
        id="follow_up", label="Follow-up", filter_kind=FilterKind.BOOLEAN,
        accessor=lambda row: bool(row["next_task"]),
        boolean_labels=("Has task", "No task"),
        sortable=False,
    ),
]
