import json
from pathlib import Path

import pytest

from hostname_validator import cli, validator
from hostname_validator.suffix_list import SuffixListFetchError

PSL = "// test rules\ncom\nco.uk\n"


@pytest.fixture()
def suffix_file(tmp_path: Path) -> Path:
    p = tmp_path / "public_suffix_list.dat"
    p.write_text(PSL, encoding="utf-8")
    return p


def _json_lines(out: str) -> list[dict]:
    return [json.loads(ln) for ln in out.splitlines() if ln.startswith("{")]


def test_prints_json_records(suffix_file, capsys):
    code = cli.run(cli._parse_args(["--suffix-list", str(suffix_file), "www.example.co.uk", "localhost", "a.com:x"]))
    assert code == 0
    recs = _json_lines(capsys.readouterr().out)
    assert recs[0]["domain"] == "example.co.uk"
    assert recs[0]["host"] == "www"
    assert recs[0]["tld"] == "co.uk"
    assert recs[1]["valid"] is False
    assert "error" in recs[2]


def test_url_input_and_xml_format(suffix_file, capsys):
    code = cli.run(cli._parse_args(["--suffix-list", str(suffix_file), "--format", "xml", "https://shop.example.com:8443/x"]))
    assert code == 0
    out = capsys.readouterr().out
    assert '<validatedHostname domain="example.com" host="shop"' in out
    assert 'protocol="https"' in out
    assert 'port="8443"' in out


def test_input_file_and_out_jsonl(suffix_file, tmp_path):
    hosts = tmp_path / "hosts.txt"
    hosts.write_text("# hosts\nexample.com\n\nmail.example.co.uk\n", encoding="utf-8")
    out = tmp_path / "out" / "results.jsonl"
    code = cli.run(cli._parse_args(["--suffix-list", str(suffix_file), "--input", str(hosts), "--out", str(out)]))
    assert code == 0
    recs = [json.loads(ln) for ln in out.read_text(encoding="utf-8").splitlines()]
    assert [r["input"] for r in recs] == ["example.com", "mail.example.co.uk"]
    assert recs[1]["host"] == "mail"


def test_fetch_error_exits_2(monkeypatch, capsys):
    def fail(self):
        raise SuffixListFetchError("offline")

    monkeypatch.setattr(validator.SuffixListClient, "fetch", fail)
    assert cli.run(cli._parse_args(["example.com"])) == 2
    assert "offline" in capsys.readouterr().err


def test_url_and_timeout_flags(monkeypatch, capsys):
    seen = {}

    def fake_fetch(self):
        seen.update(url=self.url, timeout=self.timeout_s)
        return PSL

    monkeypatch.setattr(validator.SuffixListClient, "fetch", fake_fetch)
    code = cli.run(cli._parse_args(["--url", "https://mirror.test/psl.dat", "--timeout", "3", "example.com"]))
    assert code == 0
    assert seen == {"url": "https://mirror.test/psl.dat", "timeout": 3.0}
    assert _json_lines(capsys.readouterr().out)[0]["valid"] is True


def test_main_exits_with_run_code(suffix_file):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--suffix-list", str(suffix_file), "example.com"])
    assert exc.value.code == 0
