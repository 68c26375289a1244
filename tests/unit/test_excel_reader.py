from datetime import datetime, time

import pandas as pd
import pytest

from app.services.utils import excel_reader
from app.services.utils.excel_reader import excel_to_text, ExcelReadError, _cell_to_text


@pytest.mark.parametrize("value, expected", [
    (None, ""),
    (float("nan"), ""),
    (pd.NaT, ""),
    ("  Математика ", "Математика"),
    (101.0, "101"),
    (2.5, "2.5"),
    (7, "7"),
    (time(8, 30), "08:30"),
    (datetime(2025, 1, 1, 9, 0), "09:00"),
    (datetime(2025, 9, 1), "01.09.2025"),
])
def test_cell_to_text(value, expected):
    assert _cell_to_text(value) == expected


def test_excel_to_text_renders_rows(mocker):
    frame = pd.DataFrame([
        ["Час", "КН-21", None],
        ["9:00-10:30", "Математика, вища", 101.0],
    ])
    read_excel = mocker.patch.object(excel_reader.pd, 'read_excel', return_value=frame)

    text = excel_to_text(b"fake-bytes")

    assert text == 'Час,КН-21,\n9:00-10:30,"Математика, вища",101'
    assert read_excel.call_args.kwargs['header'] is None


def test_unreadable_file_raises():
    with pytest.raises(ExcelReadError):
        excel_to_text(b"this is not an excel file")


def test_empty_sheet_raises(mocker):
    mocker.patch.object(excel_reader.pd, 'read_excel', return_value=pd.DataFrame())
    with pytest.raises(ExcelReadError):
        excel_to_text(b"fake-bytes")
