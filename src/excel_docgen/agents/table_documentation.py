"""Table Documentation Agent for profiling table columns into a report."""

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd

from .base import BaseAgent
from ..core.advisory import COLUMN_RULES, AdvisoryRule
from ..core.profiler import profile_column
from ..core.report import render
from ..core.workbook import (
    TableRegion, columns_from_dataframe, find_tables, open_workbook,
    read_column, read_header, validate_file
)
from ..models.agents import TableDocumentationRequest, TableDocumentationResponse
from ..models.base import (
    AgentRequest, AgentResponse, AgentStatus, Column, SkippedColumn,
    TableDocumentation, WorkbookDocumentation
)
from ..utils.config import SUPPORTED_TABULAR_SUFFIXES


class TableDocumentationAgent(BaseAgent):
    """Agent responsible for documenting every column of every table in a file."""

    def __init__(self, rules: Sequence[AdvisoryRule] = COLUMN_RULES):
        super().__init__(
            name="TableDocumentationAgent",
            description="Profiles table columns and renders Markdown or JSON documentation"
        )
        self.rules = rules

    async def process(self, request: AgentRequest) -> AgentResponse:
        """Process table documentation request."""
        if not isinstance(request, TableDocumentationRequest):
            return self.create_error_response(
                request,
                f"Invalid request type. Expected TableDocumentationRequest, got {type(request)}"
            )

        try:
            file_path = validate_file(request.file_path, SUPPORTED_TABULAR_SUFFIXES)

            if file_path.suffix.lower() == ".csv":
                # Cells stay text; only blanks and "null" count as missing
                df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
                tables = [self.document_dataframe(df, file_path.stem)]
                skipped_tables: List[str] = []
            else:
                tables, skipped_tables = self._document_workbook(file_path, request.sheet_name)

            report = WorkbookDocumentation(
                file_name=file_path.name,
                tables=tables,
                skipped_tables=skipped_tables
            )
            content = render(report, request.output_format, include_formulas=False)

            column_count = sum(len(t.profiles) for t in tables)
            skipped_columns = sum(len(t.skipped_columns) for t in tables)
            self.logger.info(
                f"Table documentation completed for '{file_path.name}': "
                f"{len(tables)} tables, {column_count} columns profiled, "
                f"{skipped_columns} columns and {len(skipped_tables)} tables skipped"
            )

            return TableDocumentationResponse(
                agent_id=self.name,
                request_id=request.request_id,
                status=AgentStatus.SUCCESS,
                tables=tables,
                skipped_tables=skipped_tables,
                content=content,
                result={
                    "file_name": file_path.name,
                    "table_count": len(tables),
                    "column_count": column_count,
                    "skipped_columns": skipped_columns,
                    "skipped_tables": skipped_tables,
                    "output_format": request.output_format.value
                }
            )

        except Exception as e:
            self.logger.error(f"Error during table documentation: {e}")
            return self.create_error_response(request, str(e))

    def _document_workbook(
        self,
        file_path: Path,
        sheet_name: Optional[str] = None
    ) -> Tuple[List[TableDocumentation], List[str]]:
        """Document every table of a workbook, skipping tables that fail."""
        workbook = open_workbook(file_path)
        tables: List[TableDocumentation] = []
        skipped: List[str] = []

        try:
            regions = find_tables(
                workbook,
                sheet_name=sheet_name,
                include_sheet_ranges=self.config.include_sheet_ranges
            )
            for region in regions:
                try:
                    tables.append(self.document_table(workbook[region.sheet_name], region))
                except Exception as e:
                    self.logger.error(
                        f"Skipping table '{region.name}' on sheet '{region.sheet_name}': {e}"
                    )
                    skipped.append(f"{region.sheet_name}/{region.name}: {e}")
        finally:
            workbook.close()

        return tables, skipped

    def document_table(self, sheet, region: TableRegion) -> TableDocumentation:
        """Profile the columns of one worksheet region."""
        doc = TableDocumentation(
            sheet_name=region.sheet_name,
            table_name=region.name,
            ref=region.ref,
            row_count=region.row_count,
            implicit=region.implicit
        )

        for offset, name in enumerate(read_header(sheet, region)):
            self._profile_into(
                doc, offset + 1, name,
                lambda offset=offset, name=name: read_column(sheet, region, offset, name)
            )

        return doc

    def document_dataframe(self, df: pd.DataFrame, table_name: str) -> TableDocumentation:
        """Profile the columns of a DataFrame as one implicit table."""
        doc = TableDocumentation(
            sheet_name=table_name,
            table_name=table_name,
            row_count=len(df),
            implicit=True
        )

        for position, column in enumerate(columns_from_dataframe(df), start=1):
            self._profile_into(doc, position, column.name, lambda column=column: column)

        return doc

    def _profile_into(
        self,
        doc: TableDocumentation,
        index: int,
        name: str,
        load: Callable[[], Column]
    ) -> None:
        """Read and profile one column, recording it as skipped on failure."""
        try:
            profile = profile_column(
                load(),
                index=index,
                rules=self.rules,
                **self.config.get_profiling_params()
            )
            doc.profiles.append(profile)
        except Exception as e:
            self.logger.warning(
                f"Skipping column '{name}' of table '{doc.table_name}' "
                f"on sheet '{doc.sheet_name}': {e}"
            )
            doc.skipped_columns.append(SkippedColumn(column_name=name, reason=str(e)))
