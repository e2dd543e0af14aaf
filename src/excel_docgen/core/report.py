"""Markdown and JSON rendering of documentation reports."""

from typing import Iterable, List, Sequence

from ..models.base import FormulaEntry, OutputFormat, TableDocumentation, WorkbookDocumentation

TABLE_COLUMNS = ["#", "Column Name", "Data Type", "Sample Values", "Quality", "AI Notes"]
FORMULA_COLUMNS = ["#", "Sheet", "Cell", "Formula", "Functions", "Complexity", "AI Notes"]


def escape_markdown_cell(value) -> str:
    """Keep a value inside one Markdown table cell."""
    text = "" if value is None else str(value)
    text = text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    return text.replace("|", "\\|")


def markdown_row(cells: Iterable) -> str:
    return "| " + " | ".join(escape_markdown_cell(cell) for cell in cells) + " |"


def markdown_table(headers: Sequence[str], rows: Iterable[Sequence]) -> List[str]:
    lines = [markdown_row(headers), "|" + "|".join("---" for _ in headers) + "|"]
    lines.extend(markdown_row(row) for row in rows)
    return lines


def render_table_markdown(doc: TableDocumentation) -> List[str]:
    """Render one table section."""
    kind = "Sheet" if doc.implicit else "Table"
    lines = [
        f"## {kind}: {doc.table_name}",
        "",
        f"**Sheet:** {doc.sheet_name} | **Range:** {doc.ref or 'N/A'} | "
        f"**Rows:** {doc.row_count} | **Columns:** {len(doc.profiles) + len(doc.skipped_columns)}",
        "",
    ]

    lines.extend(markdown_table(
        TABLE_COLUMNS,
        (
            [
                profile.index,
                profile.column_name,
                profile.data_type.value,
                ", ".join(profile.sample_values),
                profile.quality.label,
                profile.note,
            ]
            for profile in doc.profiles
        ),
    ))

    if doc.skipped_columns:
        lines.append("")
        lines.append("**Skipped columns:**")
        for skipped in doc.skipped_columns:
            lines.append(f"- {skipped.column_name}: {skipped.reason}")

    lines.append("")
    return lines


def render_formulas_markdown(formulas: Sequence[FormulaEntry]) -> List[str]:
    """Render the formula inventory section."""
    lines = ["## Formulas", ""]
    if not formulas:
        lines.extend(["*No formulas found.*", ""])
        return lines

    lines.extend(markdown_table(
        FORMULA_COLUMNS,
        (
            [
                position,
                entry.sheet_name,
                entry.cell,
                entry.formula,
                ", ".join(entry.functions) or "-",
                entry.complexity.value,
                entry.note,
            ]
            for position, entry in enumerate(formulas, start=1)
        ),
    ))
    lines.append("")
    return lines


def render_markdown(
    report: WorkbookDocumentation,
    include_tables: bool = True,
    include_formulas: bool = True
) -> str:
    """Render a workbook report as Markdown."""
    counts = []
    if include_tables:
        counts.append(f"**Tables:** {len(report.tables)}")
    if include_formulas:
        counts.append(f"**Formulas:** {len(report.formulas)}")

    lines = [
        f"# Workbook Documentation: {report.file_name}",
        "",
        f"**Generated:** {report.generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        " | ".join(counts),
        "",
    ]

    if include_tables:
        for doc in report.tables:
            lines.extend(render_table_markdown(doc))

        if report.skipped_tables:
            lines.append("**Skipped tables:**")
            lines.extend(f"- {name}" for name in report.skipped_tables)
            lines.append("")

    if include_formulas:
        lines.extend(render_formulas_markdown(report.formulas))

    return "\n".join(lines)


def render_json(report: WorkbookDocumentation) -> str:
    """Render a workbook report as indented JSON."""
    return report.model_dump_json(indent=2)


def render(
    report: WorkbookDocumentation,
    output_format: OutputFormat,
    include_tables: bool = True,
    include_formulas: bool = True
) -> str:
    if output_format == OutputFormat.JSON:
        return render_json(report)
    return render_markdown(report, include_tables=include_tables, include_formulas=include_formulas)
