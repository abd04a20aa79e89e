import json

import pytest

from modules.index_constituents import list_indices, load_indices


def test_default_indices_are_loaded():
    indices = load_indices()
    assert set(indices) == {"idx30", "lq45", "idx80"}
    assert len(load_indices()["idx30"].stocks) == 30
    assert len(load_indices()["lq45"].stocks) == 45
    assert load_indices()["idx30"].label == "IDX30"


def test_duplicate_constituents_are_dropped_in_order():
    stocks = load_indices()["idx80"].stocks
    assert len(stocks) == len(set(stocks))
    assert stocks.index("MAPA") < stocks.index("MAPI")
    assert stocks[0] == "ADRO"


def test_indices_are_read_only():
    indices = load_indices()
    with pytest.raises(TypeError):
        indices["idx99"] = None


def test_unknown_index_is_missing():
    with pytest.raises(KeyError):
        load_indices()["idx99"]


def test_list_indices():
    listed = {entry["key"]: entry for entry in list_indices()}
    assert listed["lq45"] == {"key": "lq45", "label": "LQ45", "total": 45}


def test_custom_indices_file(tmp_path):
    path = tmp_path / "indices.json"
    path.write_text(json.dumps({"indices": {"Kompas100": {"stocks": ["bbca", "BBCA", "tlkm"]}}}))

    indices = load_indices(str(path))

    assert list(indices) == ["kompas100"]
    assert indices["kompas100"].label == "KOMPAS100"
    assert indices["kompas100"].stocks == ("BBCA", "TLKM")
