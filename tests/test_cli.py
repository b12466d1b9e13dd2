"""Tests for the fridge command line."""

import json
from datetime import date

import pytest

from fridge.cli import build_parser, main
from fridge.db.inventory import InventoryStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("FRIDGE_STORE_PATH", raising=False)
    monkeypatch.delenv("FRIDGE_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "fridge.db")


def _run(store_path, *args):
    main(["--store", store_path, *args])


def test_parser_rejects_bad_date():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["add", "Milk", "tomorrow"])


def test_add_then_list_json(store_path, capsys):
    _run(store_path, "add", "milk", "2024-01-10", "-n", "2")
    _run(store_path, "add", "Milk", "2024-01-10", "--quantity", "3")
    capsys.readouterr()

    _run(store_path, "list", "--today", "2024-01-10", "--json")
    data = json.loads(capsys.readouterr().out)

    assert data == [
        {
            "name": "Milk",
            "best_before": "2024-01-10",
            "quantity": 5,
            "opened": False,
            "days_remaining": 0,
            "freshness": "critical",
        }
    ]


def test_list_text(store_path, capsys):
    _run(store_path, "add", "Jam", "2030-01-01")
    _run(store_path, "add", "Ham", "2024-01-05")
    capsys.readouterr()

    _run(store_path, "list", "--today", "2024-01-10")
    out = capsys.readouterr().out

    assert "Fridge on 2024-01-10 (2 items)" in out
    lines = out.splitlines()[1:]
    assert "Expired" in lines[0] and "Ham" in lines[0]
    assert "Fresh" in lines[1] and "Jam" in lines[1]


def test_list_empty(store_path, capsys):
    _run(store_path, "list")
    assert "empty" in capsys.readouterr().out


def test_add_invalid_exits_with_error(store_path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(store_path, "add", "Milk", "2024-01-10", "-n", "0")
    assert exc.value.code == 1
    assert "Quantity" in capsys.readouterr().err


def test_remove_missing_exits_with_error(store_path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(store_path, "remove", "Milk", "2024-01-10")
    assert exc.value.code == 1
    assert "not in the fridge" in capsys.readouterr().err


def test_eat_and_remove(store_path, capsys):
    _run(store_path, "add", "Eggs", "2024-01-20", "-n", "2")
    _run(store_path, "eat", "Eggs", "2024-01-20")
    assert "Opened Eggs" in capsys.readouterr().out

    store = InventoryStore(store_path)
    store.load()
    assert store.get("Eggs", date(2024, 1, 20)).opened is True

    _run(store_path, "remove", "Eggs", "2024-01-20")
    store.load()
    assert len(store) == 0


def test_corrupt_store_prints_notice(store_path, capsys):
    with open(store_path, "wb") as f:
        f.write(b"broken" * 300)

    _run(store_path, "list")
    captured = capsys.readouterr()
    assert "reset" in captured.err
    assert "empty" in captured.out


def test_import_legacy(store_path, tmp_path, capsys):
    legacy = tmp_path / "old.json"
    legacy.write_text(
        json.dumps({
            "foods": [
                {"name": "Milk", "best_before": {"day": 12, "month": 1}, "id": 1, "open": False},
                {"name": "Milk", "best_before": {"day": 12, "month": 1}, "id": 2, "open": False},
            ]
        }),
        encoding="utf-8",
    )
    _run(store_path, "import-legacy", str(legacy))
    assert "Imported 2 items" in capsys.readouterr().out

    store = InventoryStore(store_path)
    store.load()
    assert len(store) == 1
    assert next(iter(store)).quantity == 2


def test_import_legacy_bad_file(store_path, tmp_path, capsys):
    legacy = tmp_path / "old.json"
    legacy.write_text("[]", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        _run(store_path, "import-legacy", str(legacy))
    assert exc.value.code == 1


def test_config_file_thresholds_apply(store_path, tmp_path, capsys):
    config = tmp_path / "fridge.toml"
    config.write_text("[freshness]\ncritical_days = 0\nsoon_days = 10\n", encoding="utf-8")
    _run(store_path, "add", "Milk", "2024-01-15")
    capsys.readouterr()

    main(["--config", str(config), "--store", store_path, "list", "--today", "2024-01-10", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data[0]["freshness"] == "soon"


def test_pdf_command(store_path, tmp_path, capsys):
    pytest.importorskip("reportlab")
    _run(store_path, "add", "Milk", "2024-01-10")
    output = tmp_path / "out.pdf"

    _run(store_path, "pdf", str(output), "--today", "2024-01-10")
    assert output.exists()
    assert "PDF saved" in capsys.readouterr().out


def test_gui_is_default_command(store_path, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "fridge.gui.run_gui",
        lambda handlers, config, notice=None: calls.append((handlers, config, notice)),
    )
    main(["--store", store_path])
    assert len(calls) == 1
    assert calls[0][2] is None


def test_add_oversized_quantity_exits_with_error(store_path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(store_path, "add", "Milk", "2024-01-10", "-n", "100000000000000000000")
    assert exc.value.code == 1
    assert "at most" in capsys.readouterr().err

    _run(store_path, "add", "Eggs", "2024-01-10")
    assert "Added 1 x Eggs" in capsys.readouterr().out


def test_import_legacy_save_failure_exits_with_error(store_path, tmp_path, monkeypatch, capsys):
    legacy = tmp_path / "old.json"
    legacy.write_text(
        json.dumps({"foods": [{"name": "Milk", "best_before": {"day": 12, "month": 1}, "id": 1, "open": False}]}),
        encoding="utf-8",
    )

    def fail_save(self):
        raise OSError("read-only file system")

    monkeypatch.setattr(InventoryStore, "save", fail_save)
    with pytest.raises(SystemExit) as exc:
        _run(store_path, "import-legacy", str(legacy))
    assert exc.value.code == 1
    assert "read-only file system" in capsys.readouterr().err
