"""Sheet Cleanup Agent for bulk whitespace, blank-cell and hidden-row fixes."""

from pathlib import Path
from typing import Dict, List

from .base import BaseAgent
from ..core.cleanup import delete_hidden_rows, fill_blanks, trim_whitespace
from ..core.workbook import BulkOperationScope, get_sheet, open_workbook
from ..models.agents import CleanupOperation, SheetCleanupRequest, SheetCleanupResponse
from ..models.base import AgentRequest, AgentResponse, AgentStatus


class SheetCleanupAgent(BaseAgent):
    """Agent responsible for in-place cleanup of a worksheet."""

    def __init__(self):
        super().__init__(
            name="SheetCleanupAgent",
            description="Trims whitespace, fills blank cells and deletes hidden rows"
        )

    async def process(self, request: AgentRequest) -> AgentResponse:
        """Process sheet cleanup request."""
        if not isinstance(request, SheetCleanupRequest):
            return self.create_error_response(
                request,
                f"Invalid request type. Expected SheetCleanupRequest, got {type(request)}"
            )

        try:
            workbook = open_workbook(request.file_path)

            changes: Dict[str, int] = {}
            log: List[str] = []
            try:
                sheet = get_sheet(workbook, request.sheet_name)

                with BulkOperationScope(workbook):
                    for operation in request.operations:
                        count = self._apply(sheet, operation, request)
                        changes[operation.value] = count
                        log.append(f"{operation.value}: {count} changes on sheet '{sheet.title}'")
                        self.logger.info(log[-1])

                output_path = Path(request.output_path or request.file_path)
                output_path.parent.mkdir(parents=True, exist_ok=True)
                workbook.save(output_path)
            finally:
                workbook.close()

            self.logger.info(f"Cleaned workbook saved to {output_path}")

            return SheetCleanupResponse(
                agent_id=self.name,
                request_id=request.request_id,
                status=AgentStatus.SUCCESS,
                output_path=str(output_path),
                changes=changes,
                log=log,
                result={
                    "sheet_name": sheet.title,
                    "output_path": str(output_path),
                    "changes": changes
                }
            )

        except Exception as e:
            self.logger.error(f"Error during sheet cleanup: {e}")
            return self.create_error_response(request, str(e))

    def _apply(self, sheet, operation: CleanupOperation, request: SheetCleanupRequest) -> int:
        if operation == CleanupOperation.TRIM_WHITESPACE:
            return trim_whitespace(sheet, request.cell_range)
        if operation == CleanupOperation.FILL_BLANKS:
            return fill_blanks(sheet, request.cell_range, request.fill_value)
        if operation == CleanupOperation.DELETE_HIDDEN_ROWS:
            return delete_hidden_rows(sheet)
        raise ValueError(f"Unknown cleanup operation: {operation}")
