"""
Console walkthrough of the vital-sign pipeline.

Runs the reference bedside scenarios through validation, flag generation and
severity classification, then prints the ward summary.

Run with: uv run python run_demo.py
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vitalcheck import (
    RecordMetadata,
    Severity,
    VitalRecord,
    VitalsAssessor,
    filter_records,
    summarize,
)
from vitalcheck.config import get_config, print_config_summary, validate_config
from vitalcheck.log import configure_logging

console = Console()

SEVERITY_STYLES = {
    Severity.NORMAL: "green",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "bold red",
}

BASELINE = {
    "temperature": "37.0",
    "systolicBP": "120",
    "diastolicBP": "80",
    "heartRate": "72",
    "respiratoryRate": "16",
    "oxygenSaturation": "98",
}

SCENARIOS: list[tuple[str, str, dict[str, str]]] = [
    ("P001", "Stable baseline", {}),
    ("P002", "High fever", {"temperature": "39.0"}),
    (
        "P003",
        "Hypertension with tachycardia",
        {"systolicBP": "150", "diastolicBP": "95", "heartRate": "110"},
    ),
    ("P004", "Heart rate not charted", {"heartRate": ""}),
    ("P005", "Implausible temperature", {"temperature": "34.0"}),
    ("P006", "Low saturation", {"oxygenSaturation": "90"}),
    ("P007", "Fahrenheit thermometer", {"temperature": "102.2", "temperatureUnit": "F"}),
    ("P008", "Typo in respiratory rate", {"respiratoryRate": "1b"}),
]


def run_scenarios(assessor: VitalsAssessor) -> list[VitalRecord]:
    """Assess each scenario and print one row per submission."""
    console.print(Panel("Assessing bedside submissions", style="blue"))

    table = Table(title="Vital Sign Assessments")
    table.add_column("Patient", style="cyan")
    table.add_column("Scenario")
    table.add_column("Status")
    table.add_column("Flags / Errors")

    records = []
    for index, (subject_id, title, overrides) in enumerate(SCENARIOS, start=1):
        metadata = RecordMetadata(
            record_id=f"VS-{index:03d}",
            subject_id=subject_id,
            recorder_id="N001",
            location=f"2{index:02d}A",
        )
        result = assessor.assess_form({**BASELINE, **overrides}, metadata)

        if result.is_err():
            errors = result.unwrap_err().errors
            detail = ", ".join(f"{field}: {code.value}" for field, code in sorted(errors.items()))
            table.add_row(subject_id, title, "[magenta]rejected[/magenta]", detail)
            continue

        record = result.unwrap()
        records.append(record)
        style = SEVERITY_STYLES[record.severity]
        table.add_row(
            subject_id,
            title,
            f"[{style}]{record.severity.value}[/{style}]",
            "\n".join(record.alerts) or "-",
        )

    console.print(table)
    return records


def print_summary(records: list[VitalRecord]) -> None:
    console.print(Panel("Ward summary", style="bold"))

    summary = summarize(records)
    summary_table = Table()
    summary_table.add_column("Status", style="cyan")
    summary_table.add_column("Records", style="white")
    for severity in Severity:
        summary_table.add_row(severity.value, str(summary.count(severity)))
    console.print(summary_table)

    for record in filter_records(records, severity=Severity.CRITICAL):
        console.print(
            f"Needs review: {record.metadata.subject_id} ({record.metadata.location})",
            style="red",
        )


if __name__ == "__main__":
    validate_config()
    print_config_summary()
    configure_logging(get_config().logging)

    try:
        assessed = run_scenarios(VitalsAssessor())
        print_summary(assessed)
    except KeyboardInterrupt:
        console.print("\nDemo stopped by user", style="yellow")
