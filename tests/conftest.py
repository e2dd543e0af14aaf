"""Shared fixtures: small workbooks written with openpyxl."""

from datetime import datetime

import pytest
from openpyxl import Workbook
from openpyxl.worksheet.table import Table


@pytest.fixture
def sample_workbook_path(tmp_path):
    """A workbook with one table, one plain sheet with a formula, and one blank sheet."""
    workbook = Workbook()

    staff = workbook.active
    staff.title = "Staff"
    staff.append(["Employee_ID", "Salary", "Start Date", "Bonus Rate"])
    staff.append(["E001", 5000, datetime(2020, 1, 15), 0.1])
    staff.append(["E002", 6000, datetime(2021, 3, 1), 0.15])
    staff.append(["E003", None, datetime(2022, 7, 9), 0.2])
    for row in range(2, 5):
        staff.cell(row=row, column=2).number_format = '"$"#,##0.00'
        staff.cell(row=row, column=4).number_format = "0.00%"
    staff.add_table(Table(displayName="Employees", ref="A1:D4"))

    summary = workbook.create_sheet("Summary")
    summary["A1"] = "Metric"
    summary["B1"] = "Value"
    summary["A2"] = "Headcount"
    summary["B2"] = "=COUNTA(Staff!A2:A4)"

    workbook.create_sheet("Blank")

    path = tmp_path / "staff.xlsx"
    workbook.save(path)
    return path


@pytest.fixture
def messy_workbook_path(tmp_path):
    """A workbook with padded text, blank cells and hidden rows."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Data"
    sheet.append(["Region", "Owner", "Sales"])
    sheet.append(["  North ", "Ann   Lee", 10])
    sheet.append([None, "Bob", 20])
    sheet.append(["South", "   ", 30])
    sheet.append(["East", "Cy", None])
    sheet.row_dimensions[3].hidden = True

    path = tmp_path / "messy.xlsx"
    workbook.save(path)
    return path
