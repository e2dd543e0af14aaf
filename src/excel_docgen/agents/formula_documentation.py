"""Formula Documentation Agent for inventorying workbook formulas."""

from typing import List

from .base import BaseAgent
from ..core.formulas import scan_formulas
from ..core.report import render
from ..core.workbook import get_sheet, open_workbook, validate_file
from ..models.agents import FormulaDocumentationRequest, FormulaDocumentationResponse
from ..models.base import (
    AgentRequest, AgentResponse, AgentStatus, FormulaEntry, WorkbookDocumentation
)


class FormulaDocumentationAgent(BaseAgent):
    """Agent responsible for listing and grading the formulas of a workbook."""

    def __init__(self):
        super().__init__(
            name="FormulaDocumentationAgent",
            description="Lists formulas with their functions, complexity and usage notes"
        )

    async def process(self, request: AgentRequest) -> AgentResponse:
        """Process formula documentation request."""
        if not isinstance(request, FormulaDocumentationRequest):
            return self.create_error_response(
                request,
                f"Invalid request type. Expected FormulaDocumentationRequest, got {type(request)}"
            )

        try:
            file_path = validate_file(request.file_path)
            workbook = open_workbook(file_path)

            formulas: List[FormulaEntry] = []
            truncated = False
            try:
                sheet_names = [request.sheet_name] if request.sheet_name else workbook.sheetnames
                for sheet_name in sheet_names:
                    remaining = self.config.max_formulas - len(formulas)
                    if remaining <= 0:
                        truncated = True
                        break

                    entries, sheet_truncated = scan_formulas(
                        get_sheet(workbook, sheet_name),
                        max_rows=self.config.max_formula_scan_rows,
                        max_cols=self.config.max_formula_scan_columns,
                        limit=remaining
                    )
                    formulas.extend(entries)
                    truncated = truncated or sheet_truncated
            finally:
                workbook.close()

            if truncated:
                self.logger.warning(
                    f"Formula scan of '{file_path.name}' stopped at {len(formulas)} formulas"
                )

            report = WorkbookDocumentation(file_name=file_path.name, formulas=formulas)
            content = render(report, request.output_format, include_tables=False)

            self.logger.info(
                f"Formula documentation completed for '{file_path.name}': "
                f"{len(formulas)} formulas"
            )

            return FormulaDocumentationResponse(
                agent_id=self.name,
                request_id=request.request_id,
                status=AgentStatus.SUCCESS,
                formulas=formulas,
                truncated=truncated,
                content=content,
                result={
                    "file_name": file_path.name,
                    "formula_count": len(formulas),
                    "truncated": truncated,
                    "output_format": request.output_format.value
                }
            )

        except Exception as e:
            self.logger.error(f"Error during formula documentation: {e}")
            return self.create_error_response(request, str(e))
