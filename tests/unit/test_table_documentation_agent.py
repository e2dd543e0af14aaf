"""
Unit tests for Table Documentation Agent.
"""

import json

import pytest

from excel_docgen.agents import table_documentation
from excel_docgen.agents.table_documentation import TableDocumentationAgent
from excel_docgen.models.agents import TableDocumentationRequest
from excel_docgen.models.base import (
    AgentRequest, AgentStatus, OutputFormat, QualityLevel, TypeClassification
)


class TestTableDocumentationAgent:
    """Test suite for Table Documentation Agent."""

    @pytest.fixture
    def agent(self):
        """Create a Table Documentation Agent instance."""
        return TableDocumentationAgent()

    @pytest.mark.asyncio
    async def test_document_workbook(self, agent, sample_workbook_path):
        """Every table and sheet range is profiled."""
        request = TableDocumentationRequest(
            agent_id="TableDocumentationAgent",
            file_path=str(sample_workbook_path)
        )

        async with agent:
            response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        assert [t.table_name for t in response.tables] == ["Employees", "Summary"]
        assert response.result["column_count"] == 6

        employees = response.tables[0]
        assert [(p.column_name, p.data_type) for p in employees.profiles] == [
            ("Employee_ID", TypeClassification.TEXT),
            ("Salary", TypeClassification.CURRENCY),
            ("Start Date", TypeClassification.DATE),
            ("Bonus Rate", TypeClassification.PERCENTAGE),
        ]

        salary = employees.profiles[1]
        assert salary.quality.level == QualityLevel.WARNING
        assert salary.quality.empty_percent == 33
        assert salary.sample_values == ["5000", "6000"]
        assert employees.profiles[3].note == "Ratio field - format as percentage"

        summary = response.tables[1]
        assert summary.implicit
        assert summary.profiles[1].data_type == TypeClassification.FORMULA

        assert "| 1 | Employee_ID | Text | E001, E002 | Clean | Use for lookups/joins |" in response.content
        assert "## Sheet: Summary" in response.content
        assert "## Formulas" not in response.content

    @pytest.mark.asyncio
    async def test_single_sheet_json(self, agent, sample_workbook_path):
        """A sheet filter and JSON output."""
        request = TableDocumentationRequest(
            agent_id="TableDocumentationAgent",
            file_path=str(sample_workbook_path),
            sheet_name="Staff",
            output_format=OutputFormat.JSON
        )

        response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        data = json.loads(response.content)
        assert [t["table_name"] for t in data["tables"]] == ["Employees"]
        assert response.result["output_format"] == "json"

    @pytest.mark.asyncio
    async def test_document_csv(self, agent, tmp_path):
        """CSV files are documented as one implicit table."""
        csv_path = tmp_path / "orders.csv"
        csv_path.write_text("order_id,amount\n1,10.5\n2,\n3,7\n")

        request = TableDocumentationRequest(agent_id="TableDocumentationAgent", file_path=str(csv_path))
        response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        table = response.tables[0]
        assert table.table_name == "orders"
        assert table.implicit
        assert table.row_count == 3

        amount = table.profiles[1]
        assert amount.data_type == TypeClassification.NUMBER
        assert amount.quality.level == QualityLevel.WARNING
        assert amount.quality.empty_percent == 33
        assert amount.note == "Financial metric - use for aggregations"

    @pytest.mark.asyncio
    async def test_csv_cells_are_kept_as_text(self, agent, tmp_path):
        """NA markers are values and zero-padded codes keep their zeros."""
        csv_path = tmp_path / "regions.csv"
        csv_path.write_text("Country,Code\nNA,001\nNA,002\nUS,003\n")

        request = TableDocumentationRequest(agent_id="TableDocumentationAgent", file_path=str(csv_path))
        response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        country, code = response.tables[0].profiles

        assert country.data_type == TypeClassification.TEXT
        assert country.quality.level == QualityLevel.CLEAN
        assert country.sample_values == ["NA", "NA"]

        assert code.data_type == TypeClassification.NUMBER
        assert code.quality.level == QualityLevel.CLEAN
        assert code.sample_values == ["001", "002"]

    @pytest.mark.asyncio
    async def test_unreadable_column_is_skipped(self, agent, sample_workbook_path, monkeypatch):
        """One bad column does not abort the table."""
        real_read_column = table_documentation.read_column

        def flaky_read_column(sheet, region, offset, name=None):
            if region.name == "Employees" and offset == 1:
                raise OSError("cannot read cells")
            return real_read_column(sheet, region, offset, name)

        monkeypatch.setattr(table_documentation, "read_column", flaky_read_column)

        request = TableDocumentationRequest(
            agent_id="TableDocumentationAgent",
            file_path=str(sample_workbook_path)
        )
        response = await agent.process(request)

        assert response.status == AgentStatus.SUCCESS
        employees = response.tables[0]
        assert [p.column_name for p in employees.profiles] == ["Employee_ID", "Start Date", "Bonus Rate"]
        assert employees.skipped_columns[0].column_name == "Salary"
        assert "cannot read cells" in employees.skipped_columns[0].reason
        assert response.result["skipped_columns"] == 1
        assert "- Salary: cannot read cells" in response.content

    @pytest.mark.asyncio
    async def test_nonexistent_file(self, agent):
        """Test handling of non-existent file."""
        request = TableDocumentationRequest(
            agent_id="TableDocumentationAgent",
            file_path="/nonexistent/file.xlsx"
        )

        response = await agent.process(request)

        assert response.status == AgentStatus.FAILED
        assert "does not exist" in response.error_log

    @pytest.mark.asyncio
    async def test_unknown_sheet(self, agent, sample_workbook_path):
        request = TableDocumentationRequest(
            agent_id="TableDocumentationAgent",
            file_path=str(sample_workbook_path),
            sheet_name="Missing"
        )

        response = await agent.process(request)

        assert response.status == AgentStatus.FAILED
        assert "not found" in response.error_log

    @pytest.mark.asyncio
    async def test_invalid_request_type(self, agent):
        """Test handling of invalid request type."""
        response = await agent.process(AgentRequest(agent_id="TableDocumentationAgent"))

        assert response.status == AgentStatus.FAILED
        assert "Invalid request type" in response.error_log
