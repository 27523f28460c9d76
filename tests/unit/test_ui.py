"""Tests for CLI UI helpers."""

import math

from rich.console import Console

from autokatalog.cli.ui import (
    create_catalog_table,
    create_vehicle_table,
    error_panel,
    format_price,
    format_year,
    info_panel,
    success_panel,
    warning_panel,
)
from autokatalog.models import CatalogVehicle


def _render(renderable) -> str:
    console = Console(width=160, record=True)
    console.print(renderable)
    return console.export_text()


class TestFormatPrice:
    def test_rupiah_grouping(self):
        assert format_price(255_000_000) == "Rp 255.000.000"

    def test_string_with_commas(self):
        assert format_price("1,500,000") == "Rp 1.500.000"

    def test_nan(self):
        assert format_price(math.nan) == "-"

    def test_infinite(self):
        assert format_price(math.inf) == "-"

    def test_unparsable_string_shown_as_is(self):
        assert format_price("call") == "call"


class TestFormatYear:
    def test_year(self):
        assert format_year(2024.0) == "2024"

    def test_nan(self):
        assert format_year(math.nan) == "-"

    def test_infinite(self):
        assert format_year(math.inf) == "-"


class TestPanels:
    def test_success_panel_renderable(self):
        assert "It worked!" in _render(success_panel("It worked!"))

    def test_error_panel_with_details(self):
        text = _render(error_panel("Something failed", "Row 2: [bad]"))
        assert "Something failed" in text
        assert "Row 2: [bad]" in text

    def test_warning_panel_renderable(self):
        assert warning_panel("Careful") is not None

    def test_info_panel_title(self):
        assert info_panel("Content", title="Info").title == "Info"


class TestTables:
    def test_vehicle_table(self, make_vehicle):
        table = create_vehicle_table([make_vehicle(), make_vehicle("vehicle_2")])
        assert table.row_count == 2
        text = _render(table)
        assert "vehicle_2" in text
        assert "Rp 255.000.000" in text

    def test_catalog_table(self):
        items = [CatalogVehicle(brand="Honda", model="Jazz", year=2019, price=150_000_000)]
        text = _render(create_catalog_table(items, title="Used Car"))
        assert "Used Car" in text
        assert "2019" in text
        assert "Rp 150.000.000" in text

    def test_markup_in_user_text_shown_literally(self, make_vehicle):
        vehicle = make_vehicle(brand="[/x]", model="[bold]Jazz", location="[red]")
        text = _render(create_vehicle_table([vehicle]))
        assert "[/x] [bold]Jazz" in text
        assert "[red]" in text

    def test_markup_in_catalog_fields_shown_literally(self):
        items = [CatalogVehicle(brand="[/x]", model="Jazz", type="[dim]")]
        text = _render(create_catalog_table(items, title="Used Car · [/x]"))
        assert "[/x]" in text
        assert "[dim]" in text

    def test_error_message_shown_literally(self):
        assert "Vehicle not found: [/x]" in _render(error_panel("Vehicle not found: [/x]"))
