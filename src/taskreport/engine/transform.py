"""
Record-to-report pipeline.

Main API:
    process_records(records, today=None, config=None, headers=None)  → ReportData
    load_report(csv_path, today=None, config=None)                   → ReportData

One synchronous full-batch pass. The same (records, today) pair always gives
an equal ReportData; ``today`` is a parameter so overdue and duration math
never depend on when the run happens.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

from taskreport.config.schema import ReportConfig, display_options
from taskreport.engine.builder import build_task
from taskreport.engine.fields import discover_custom_fields
from taskreport.engine.grouping import group_tasks
from taskreport.engine.sections import resolve_sections
from taskreport.engine.stats import calculate_stats
from taskreport.engine.timeline import compute_project_range, order_timeline, position_tasks
from taskreport.engine.validation import log_diagnostics, validate_records
from taskreport.models.report import LoadError, LoadErrorKind, ReportData
from taskreport.parsers.csv_loader import CsvLoadError, load_table
from taskreport.utils.dates import DateLike, normalize_today

log = logging.getLogger(__name__)

LOAD_ERROR_HINTS: Dict[LoadErrorKind, str] = {
    LoadErrorKind.CSV_NOT_FOUND: (
        "Export your project as CSV and save it at the configured CSV path."
    ),
    LoadErrorKind.CSV_PARSE_ERROR: (
        "The CSV could not be parsed. Re-export it and check that it has a header "
        "row and that every row has the same number of columns."
    ),
}


def process_records(
    records: Sequence[Mapping[str, str]],
    today: Optional[DateLike] = None,
    config: Optional[ReportConfig] = None,
    headers: Optional[Sequence[str]] = None,
) -> ReportData:
    """
    Transform parsed CSV records into a ReportData.

    Args:
        records: Header-keyed rows in file order
        today: Reference date for overdue/duration math (UTC today if omitted)
        config: Report config; only its display flags are passed through
        headers: The file's header row, if known; used for the column checks

    Returns:
        ReportData; never raises for bad data, problems go to ``diagnostics``
    """
    today = normalize_today(today)
    records = list(records)

    diagnostics = validate_records(records, headers)
    log_diagnostics(diagnostics)

    custom_field_names = discover_custom_fields(records)
    resolution = resolve_sections(records)
    if resolution.lookup.collisions:
        diagnostics.append(
            f"{resolution.lookup.collisions} duplicate task name(s): "
            f"{', '.join(resolution.lookup.duplicate_names)}; first occurrence wins"
        )

    tasks = [
        build_task(
            record,
            row=index,
            section=section,
            section_order=resolution.order_of(section),
            custom_field_names=custom_field_names,
            today=today,
        )
        for index, (record, section) in enumerate(zip(records, resolution.effective))
    ]

    project_range = compute_project_range(tasks)
    tasks = position_tasks(tasks, project_range)
    grouping = group_tasks(tasks, resolution.names)

    ordered = grouping.ordered
    name_index: Dict[str, int] = {}
    first_rows: Dict[str, int] = {}
    for position, task in enumerate(ordered):
        if task.name and (task.name not in first_rows or task.row < first_rows[task.name]):
            first_rows[task.name] = task.row
            name_index[task.name] = position

    log.info(
        "Processed %d tasks across %d sections (%d custom fields)",
        len(ordered),
        len(resolution.names),
        len(custom_field_names),
    )

    return ReportData(
        all_tasks=tuple(ordered),
        sections={name: tuple(bucket) for name, bucket in grouping.sections.items()},
        section_names=tuple(resolution.names),
        stats=calculate_stats(ordered, resolution.names),
        timeline=tuple(order_timeline(ordered)),
        project_range=project_range,
        custom_field_names=tuple(custom_field_names),
        name_index=name_index,
        subtasks_by_parent={
            name: tuple(subs) for name, subs in grouping.subtasks_by_parent.items()
        },
        section_task_names={
            name: frozenset(names) for name, names in grouping.section_task_names.items()
        },
        section_subtasks={
            section: {parent: tuple(subs) for parent, subs in by_parent.items()}
            for section, by_parent in grouping.section_subtasks.items()
        },
        diagnostics=tuple(diagnostics),
        display=display_options(config or ReportConfig()),
    )


def load_report(
    csv_path: Union[str, Path],
    today: Optional[DateLike] = None,
    config: Optional[ReportConfig] = None,
) -> ReportData:
    """
    Load the CSV at ``csv_path`` and process it.

    A missing or unparseable file does not raise: the result is an empty
    report whose ``error`` says which of the two happened.
    """
    try:
        headers, records = load_table(csv_path)
    except CsvLoadError as e:
        log.warning("Could not load %s: %s", csv_path, e)
        return ReportData.empty(
            error=LoadError(kind=e.kind, message=str(e), hint=LOAD_ERROR_HINTS[e.kind]),
            display=display_options(config or ReportConfig()),
        )
    return process_records(records, today=today, config=config, headers=headers)
