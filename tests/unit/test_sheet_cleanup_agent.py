"""
Unit tests for Sheet Cleanup Agent.
"""

import pytest
from openpyxl import load_workbook
from pydantic import ValidationError

from excel_docgen.agents import sheet_cleanup
from excel_docgen.agents.sheet_cleanup import SheetCleanupAgent
from excel_docgen.models.agents import CleanupOperation, SheetCleanupRequest
from excel_docgen.models.base import AgentStatus


class TestSheetCleanupAgent:
    """Test suite for Sheet Cleanup Agent."""

    @pytest.fixture
    def agent(self):
        return SheetCleanupAgent()

    @pytest.mark.asyncio
    async def test_cleanup_to_new_file(self, agent, messy_workbook_path, tmp_path):
        output_path = tmp_path / "out" / "clean.xlsx"
        request = SheetCleanupRequest(
            agent_id="SheetCleanupAgent",
            file_path=str(messy_workbook_path),
            sheet_name="Data",
            operations=[CleanupOperation.TRIM_WHITESPACE, CleanupOperation.DELETE_HIDDEN_ROWS],
            output_path=str(output_path)
        )

        async with agent:
            response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        assert response.changes == {"trim_whitespace": 3, "delete_hidden_rows": 1}
        assert len(response.log) == 2
        assert response.output_path == str(output_path)

        cleaned = load_workbook(output_path)
        sheet = cleaned["Data"]
        assert sheet["A2"].value == "North"
        assert sheet["A3"].value == "South"
        assert sheet["B3"].value is None
        assert cleaned.calculation.calcMode != "manual"

        # Source file is untouched
        assert load_workbook(messy_workbook_path)["Data"]["A2"].value == "  North "

    @pytest.mark.asyncio
    async def test_fill_blanks_in_place(self, agent, messy_workbook_path):
        request = SheetCleanupRequest(
            agent_id="SheetCleanupAgent",
            file_path=str(messy_workbook_path),
            operations=[CleanupOperation.FILL_BLANKS],
            fill_value="N/A"
        )

        response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        assert response.changes == {"fill_blanks": 3}
        assert load_workbook(messy_workbook_path)["Data"]["C5"].value == "N/A"

    @pytest.mark.asyncio
    async def test_unknown_sheet(self, agent, messy_workbook_path):
        request = SheetCleanupRequest(
            agent_id="SheetCleanupAgent",
            file_path=str(messy_workbook_path),
            sheet_name="Missing",
            operations=[CleanupOperation.TRIM_WHITESPACE]
        )

        response = await agent.process(request)

        assert response.status == AgentStatus.FAILED
        assert "not found" in response.error_log

    def test_operations_required(self, messy_workbook_path):
        with pytest.raises(ValidationError):
            SheetCleanupRequest(
                agent_id="SheetCleanupAgent",
                file_path=str(messy_workbook_path),
                operations=[]
            )

    @pytest.mark.asyncio
    async def test_workbook_closed_when_operation_fails(self, agent, messy_workbook_path, monkeypatch):
        opened = []
        real_open_workbook = sheet_cleanup.open_workbook

        def tracking_open_workbook(file_path):
            workbook = real_open_workbook(file_path)
            closed = []
            real_close = workbook.close
            workbook.close = lambda: (closed.append(True), real_close())
            opened.append(closed)
            return workbook

        def failing_trim(sheet, cell_range=None):
            raise RuntimeError("trim failed")

        monkeypatch.setattr(sheet_cleanup, "open_workbook", tracking_open_workbook)
        monkeypatch.setattr(sheet_cleanup, "trim_whitespace", failing_trim)

        request = SheetCleanupRequest(
            agent_id="SheetCleanupAgent",
            file_path=str(messy_workbook_path),
            operations=[CleanupOperation.TRIM_WHITESPACE]
        )
        response = await agent.process(request)

        assert response.status == AgentStatus.FAILED
        assert "trim failed" in response.error_log
        assert opened == [[True]]
