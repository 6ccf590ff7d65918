import pytest

from app.core.config import parse_code_list
from app.db.models import UsageMode
from seed import parse_args, seed_codes


def test_parse_code_list_skips_bad_entries():
    assert parse_code_list("zenyxontop:200, bad, X:abc, Y:-1 ,LAUNCH:50") == {
        "ZENYXONTOP": 200,
        "LAUNCH": 50,
    }
    assert parse_code_list("") == {}


def test_parse_args():
    assert parse_args(["launch:500:global_once", "FREE:10"]) == [
        ("LAUNCH", 500, UsageMode.GLOBAL_ONCE),
        ("FREE", 10, UsageMode.PER_ACCOUNT),
    ]
    with pytest.raises(SystemExit):
        parse_args(["broken"])


@pytest.mark.parametrize("arg", ["FREE:ten", "FREE:0", "FREE:-3", "FREE:10:forever", ":10"])
def test_parse_args_rejects_bad_values(arg):
    with pytest.raises(SystemExit, match="Bad code spec"):
        parse_args([arg])


def test_seed_codes_writes_catalog(data_file):
    registry = seed_codes(data_file, [("LAUNCH", 500, UsageMode.GLOBAL_ONCE)])

    assert registry.get_code("LAUNCH").usage_mode == UsageMode.GLOBAL_ONCE
    assert "LAUNCH" in data_file.read_text(encoding="utf-8")
