import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from app.models.asset import Asset
from app.models.manufacturer import Manufacturer
from app.schemas.label import LabelOptions, LabelOptionsOverride
from app.services.label_render import generate_label_pdf, generate_zpl, send_zpl
from app.services.label_service import (
    BASELINE_OPTIONS,
    clamp_copies,
    render_label_fields,
    resolve_label_options,
    toggle_option,
)


def _asset(**fields) -> Asset:
    fields.setdefault("item_number", "LT-0001")
    return Asset(**fields)


def test_override_wins_over_default():
    defaults = LabelOptions(show_assigned_to=True, show_model=False, show_serial_number=True)
    resolved = resolve_label_options(defaults, {"showModel": True})
    assert resolved.show_model is True
    assert resolved.show_assigned_to is True


def test_empty_overrides_keep_defaults():
    defaults = LabelOptions(show_assigned_to=False, show_model=True, show_serial_number=False)
    assert resolve_label_options(defaults, {}) == defaults
    assert resolve_label_options(defaults, LabelOptionsOverride()) == defaults


def test_missing_defaults_fall_back_to_all_on():
    resolved = resolve_label_options(None, {"show_serial_number": False})
    assert resolved == LabelOptions(show_assigned_to=True, show_model=True, show_serial_number=False)
    assert resolve_label_options(None) == BASELINE_OPTIONS


def test_toggle_option():
    options = toggle_option(BASELINE_OPTIONS, "show_model")
    assert options.show_model is False
    assert toggle_option(options, "show_model").show_model is True
    assert BASELINE_OPTIONS.show_model is True


def test_toggle_unknown_option():
    with pytest.raises(KeyError):
        toggle_option(BASELINE_OPTIONS, "show_price")


@pytest.mark.parametrize(
    "value, expected",
    [(1, 1), (5, 5), (100, 100), (150, 100), (0, 1), (-3, 1), ("7", 7), ("abc", 1), (None, 1)],
)
def test_clamp_copies(value, expected):
    assert clamp_copies(value) == expected


def test_render_fields_in_order():
    asset = _asset(
        assigned_to="Jane Doe",
        model="MacBook Air",
        serial_number="C02XYZ",
        manufacturer=Manufacturer(name="Apple"),
    )
    lines = render_label_fields(asset, BASELINE_OPTIONS, organization="Hillside Academy")
    assert lines == ["Jane Doe", "Item:LT-0001", "Apple MacBook Air", "S/N:C02XYZ", "Hillside Academy"]


def test_render_fields_skips_disabled_and_empty():
    asset = _asset(assigned_to="", model="Chromebook", serial_number="SN9")
    options = LabelOptions(show_assigned_to=True, show_model=True, show_serial_number=False)
    assert render_label_fields(asset, options) == ["Item:LT-0001", "Chromebook"]


def test_organization_footer_ignores_options():
    options = LabelOptions(show_assigned_to=False, show_model=False, show_serial_number=False)
    assert render_label_fields(_asset(model="X"), options, "Org") == ["Item:LT-0001", "Org"]


def test_generate_zpl():
    zpl = generate_zpl("https://inv.test/assets/1", ["Item:LT-0001", "S/N:^bad~"], footer="Org", copies=4)
    assert zpl.startswith("^XA")
    assert zpl.rstrip().endswith("^XZ")
    assert "^FDQA,https://inv.test/assets/1^FS" in zpl
    assert "^FDS/N: bad ^FS" in zpl
    assert "^FDOrg^FS" in zpl
    assert "^PQ4" in zpl


def test_generate_zpl_without_footer():
    zpl = generate_zpl("data", ["Item:1"])
    assert "^GB" not in zpl
    assert "^PQ1" in zpl


def test_generate_label_pdf_pages():
    pdf = generate_label_pdf("data", ["Item:1", "A very long line " * 10], footer="Org", copies=2)
    assert pdf.startswith(b"%PDF")
    assert b"/Count 2" in pdf


class _StallingWriter:
    def __init__(self):
        self.closed = []

    def write(self, data):
        pass

    async def drain(self):
        await asyncio.sleep(1)

    def close(self):
        self.closed.append(True)

    async def wait_closed(self):
        pass


@pytest.mark.asyncio
async def test_send_zpl_closes_writer_when_drain_times_out():
    writer = _StallingWriter()
    with patch("asyncio.open_connection", new_callable=AsyncMock, return_value=(None, writer)):
        sent = await send_zpl("^XA^XZ", "printer.test", 9100, timeout=0.01)

    assert sent is False
    assert writer.closed


@pytest.mark.asyncio
async def test_send_zpl_refused_connection():
    with patch("asyncio.open_connection", new_callable=AsyncMock, side_effect=ConnectionRefusedError()):
        assert await send_zpl("^XA^XZ", "printer.test", 9100, timeout=0.01) is False
