"""Tests for CSV import/export."""

from datetime import date

import pytest

from autokatalog.catalog import csv_codec
from autokatalog.catalog.csv_codec import (
    EXPORT_HEADERS,
    IMPORT_HEADERS,
    export_all,
    export_filename,
    fields_to_row,
    generate_template,
    parse,
    row_to_vehicle,
    split_line,
    validate,
)
from autokatalog.exceptions import EmptyExportError, FormatError, RowValidationError
from autokatalog.models import Category, Condition

HEADER = ",".join(IMPORT_HEADERS)


def _row(**overrides) -> dict[str, str]:
    row = {
        "merk": "Toyota",
        "model": "Avanza",
        "tipe": "MPV",
        "warna": "Hitam",
        "tahun": "2024",
        "cc": "1500",
        "transmisi": "CVT",
        "lokasi": "Jakarta",
        "harga": "255000000",
        "kategori": "Car",
        "kondisi": "New",
    }
    row.update(overrides)
    return row


class TestSplitLine:
    def test_plain(self):
        assert split_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_comma_kept_in_cell(self):
        assert split_line('"Toyota","255,000,000"') == ["Toyota", "255,000,000"]

    def test_trims_cells(self):
        assert split_line(" a , b ") == ["a", "b"]

    def test_doubled_quotes_kept(self):
        assert split_line('"Avanza 17"" Velg","x"') == ['Avanza 17" Velg', "x"]

    def test_unquoted_quote_kept(self):
        assert split_line('Avanza 17" Velg,x') == ['Avanza 17" Velg', "x"]


class TestParseStructure:
    def test_header_only_rejected(self):
        with pytest.raises(FormatError) as exc:
            parse(HEADER + "\n")
        assert "at least a header row and one data row" in exc.value.details

    def test_blank_lines_do_not_count(self):
        with pytest.raises(FormatError):
            parse("\n\n" + HEADER + "\n\n   \n")

    def test_missing_headers_listed(self):
        header = ",".join(h for h in IMPORT_HEADERS if h not in ("harga", "kondisi"))
        with pytest.raises(FormatError) as exc:
            parse(header + "\nx\n")
        assert exc.value.details == "Missing required headers: harga, kondisi"

    def test_header_order_does_not_matter(self):
        headers = list(reversed(IMPORT_HEADERS))
        values = [_row()[h] for h in headers]
        result = parse(",".join(headers) + "\n" + ",".join(values))
        assert result.ok
        assert result.records[0].brand == "Toyota"


class TestParseRows:
    def test_sample_file(self, sample_csv):
        result = parse(sample_csv)
        assert result.ok
        assert [v.brand for v in result.records] == ["Toyota", "Honda", "Suzuki"]
        assert result.records[1].category == Category.MOTORCYCLE
        assert result.records[2].condition == Condition.USED

    def test_generated_ids_are_distinct(self, sample_csv):
        ids = [v.id for v in parse(sample_csv).records]
        assert len(set(ids)) == len(ids)

    def test_timestamps_set(self, sample_csv):
        v = parse(sample_csv).records[0]
        assert v.created_at == v.updated_at

    def test_row_errors_use_file_line_numbers(self):
        text = "\n".join([
            HEADER,
            "Toyota,Avanza,MPV,Hitam,2024,1500,CVT,Jakarta,255000000,Car,New",
            ",Avanza,MPV,Hitam,2024,1500,CVT,Jakarta,255000000,Car,New",
        ])
        result = parse(text)
        assert len(result.records) == 1
        assert result.errors == ["Row 3: merk is required"]

    def test_multiple_problems_in_one_row(self):
        text = HEADER + "\nToyota,Avanza,MPV,Hitam,abc,1500,CVT,Jakarta,cheap,Truck,Baru"
        result = parse(text)
        assert result.errors == [
            "Row 2: kategori must be Car or Motorcycle, kondisi must be New or Used, "
            "tahun must be a number, harga must be a number"
        ]

    def test_short_row_padded_with_empty_cells(self):
        result = parse(HEADER + "\nToyota,Avanza")
        assert not result.ok
        assert "tahun is required" in result.errors[0]

    def test_quoted_price_with_commas(self):
        text = HEADER + '\n"Toyota","Avanza","MPV","Hitam","2024","1500","CVT","Jakarta","255,000,000","Car","New"'
        result = parse(text)
        assert result.ok
        assert result.records[0].price == "255,000,000"

    def test_template_parses_cleanly(self):
        result = parse(generate_template())
        assert result.ok
        assert len(result.records) == len(csv_codec.TEMPLATE_ROWS)


class TestValidate:
    def test_valid(self):
        assert validate(_row()) == []

    def test_required_fields(self):
        errors = validate(_row(merk="", model=" ", tahun="", harga=""))
        assert errors == [
            "merk is required",
            "model is required",
            "tahun is required",
            "harga is required",
        ]

    def test_enum_cells_are_trimmed(self):
        assert validate(_row(kategori=" Motorcycle ", kondisi=" Used")) == []

    def test_enum_is_case_sensitive(self):
        assert "kategori must be Car or Motorcycle" in validate(_row(kategori="car"))

    def test_multi_line_cell_rejected(self):
        assert validate(_row(model="Avanza\nG")) == ["model must be a single line"]


class TestRowToVehicle:
    def test_supplied_id_kept(self):
        v = row_to_vehicle({**_row(), "id": "vehicle_42"})
        assert v.id == "vehicle_42"

    def test_generated_id(self):
        assert row_to_vehicle(_row(), index=2).id.endswith("_2")

    def test_invalid_row_raises(self):
        with pytest.raises(RowValidationError) as exc:
            row_to_vehicle(_row(harga="x"))
        assert exc.value.messages == ["harga must be a number"]

    def test_fields_to_row(self):
        assert fields_to_row({"brand": "Honda", "price": "1", "unknown": "x"}) == {
            "merk": "Honda",
            "harga": "1",
        }

    def test_fields_to_row_enum_members(self):
        row = fields_to_row({"category": Category.MOTORCYCLE, "condition": Condition.USED})
        assert row == {"kategori": "Motorcycle", "kondisi": "Used"}


class TestSerialize:
    def test_template_header_unquoted_rows_quoted(self):
        lines = generate_template().splitlines()
        assert lines[0] == HEADER
        assert lines[1].startswith('"Toyota","Avanza 1.5 G"')
        assert len(lines) == 4

    def test_export_empty_raises(self):
        with pytest.raises(EmptyExportError):
            export_all([])

    def test_export_columns(self, make_vehicle):
        lines = export_all([make_vehicle()]).splitlines()
        assert lines[0] == ",".join(EXPORT_HEADERS)
        assert lines[1].startswith('"vehicle_1","Toyota","Avanza"')
        assert '"2024-01-15T08:30:00+00:00"' in lines[1]

    def test_export_parses_back(self, make_vehicle):
        original = [
            make_vehicle("vehicle_1"),
            make_vehicle(
                "vehicle_2",
                model='Avanza 17" Velg',
                type="MPV, 7 seater",
                color='"Hitam" metalik',
                location="Jakarta Selatan",
                price="1,500,000",
                category="Motorcycle",
                condition="Used",
            ),
            make_vehicle("vehicle_3", type="", color="", engine_capacity="", transmission="", location=""),
        ]
        result = parse(export_all(original))
        assert result.ok
        fields = set(csv_codec.FIELD_COLUMNS)
        for before, after in zip(original, result.records, strict=True):
            assert after.model_dump(include=fields) == before.model_dump(include=fields)

    def test_export_filename(self):
        assert export_filename(date(2024, 5, 1)) == "vehicle_data_2024-05-01.csv"
