"""
Orchestrator - drives the documentation and cleanup agents.

The agents produce report content; the orchestrator decides where it
goes and writes it to disk.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..agents import FormulaDocumentationAgent, SheetCleanupAgent, TableDocumentationAgent
from ..models.agents import (
    CleanupOperation, FormulaDocumentationRequest, SheetCleanupRequest,
    TableDocumentationRequest
)
from ..models.base import AgentStatus, OutputFormat, WorkbookDocumentation
from ..utils.config import REPORT_SUFFIXES, get_config
from ..utils.logging import get_logger
from .report import render


class Orchestrator:
    """Coordinates agents for whole-workbook documentation and cleanup."""

    def __init__(self):
        self.config = get_config()
        self.logger = get_logger(f"{__name__}.Orchestrator")
        self.table_documentation_agent = TableDocumentationAgent()
        self.formula_documentation_agent = FormulaDocumentationAgent()
        self.sheet_cleanup_agent = SheetCleanupAgent()

    def default_output_path(self, file_path: Union[str, Path], output_format: OutputFormat) -> Path:
        """``<output_dir>/<stem>_documentation.<ext>``"""
        stem = Path(file_path).stem
        return Path(self.config.output_dir) / f"{stem}_documentation{REPORT_SUFFIXES[output_format.value]}"

    async def document_workbook(
        self,
        file_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
        output_format: OutputFormat = OutputFormat.MARKDOWN,
        sheet_name: Optional[str] = None,
        include_formulas: bool = True
    ) -> Dict[str, Any]:
        """Document tables (and optionally formulas) of a file and write the report."""
        request_id = f"req_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{id(self) % 10000}"
        file_path = Path(file_path)
        self.logger.info(f"[Orchestrator {request_id}] Documenting {file_path}")

        async with self.table_documentation_agent as agent:
            table_response = await agent.execute_with_timeout(TableDocumentationRequest(
                agent_id=agent.name,
                request_id=request_id,
                file_path=str(file_path),
                sheet_name=sheet_name,
                output_format=output_format
            ))

        if table_response.status != AgentStatus.SUCCESS:
            self.logger.error(
                f"[Orchestrator {request_id}] Table documentation failed: {table_response.error_log}"
            )
            return {
                "success": False,
                "request_id": request_id,
                "error": table_response.error_log,
                "status": table_response.status.value
            }

        report = WorkbookDocumentation(
            file_name=file_path.name,
            tables=table_response.tables,
            skipped_tables=table_response.skipped_tables
        )

        warnings: List[str] = []
        document_formulas = include_formulas and file_path.suffix.lower() != ".csv"
        if document_formulas:
            async with self.formula_documentation_agent as agent:
                formula_response = await agent.execute_with_timeout(FormulaDocumentationRequest(
                    agent_id=agent.name,
                    request_id=request_id,
                    file_path=str(file_path),
                    sheet_name=sheet_name,
                    output_format=output_format
                ))

            if formula_response.status == AgentStatus.SUCCESS:
                report.formulas = formula_response.formulas
            else:
                # Table documentation stands on its own
                warnings.append(f"Formula documentation failed: {formula_response.error_log}")
                self.logger.warning(f"[Orchestrator {request_id}] {warnings[-1]}")

        content = render(report, output_format, include_formulas=document_formulas)
        target = Path(output_path) if output_path else self.default_output_path(file_path, output_format)
        self.write_report(target, content)

        self.logger.info(f"[Orchestrator {request_id}] Report written to {target}")
        return {
            "success": True,
            "request_id": request_id,
            "output_path": str(target),
            "table_count": len(report.tables),
            "formula_count": len(report.formulas),
            "skipped_tables": report.skipped_tables,
            "warnings": warnings
        }

    async def clean_sheet(
        self,
        file_path: Union[str, Path],
        operations: List[CleanupOperation],
        sheet_name: Optional[str] = None,
        cell_range: Optional[str] = None,
        fill_value: Optional[str] = None,
        output_path: Optional[Union[str, Path]] = None
    ) -> Dict[str, Any]:
        """Run cleanup operations on one sheet and save the workbook."""
        async with self.sheet_cleanup_agent as agent:
            response = await agent.execute_with_timeout(SheetCleanupRequest(
                agent_id=agent.name,
                file_path=str(file_path),
                sheet_name=sheet_name,
                operations=operations,
                cell_range=cell_range,
                fill_value=fill_value,
                output_path=str(output_path) if output_path else None
            ))

        if response.status != AgentStatus.SUCCESS:
            return {"success": False, "error": response.error_log, "status": response.status.value}

        return {
            "success": True,
            "output_path": response.output_path,
            "changes": response.changes,
            "log": response.log
        }

    @staticmethod
    def write_report(output_path: Path, content: str) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
