import json

from safeconfig import config
from safeconfig.cli import infer_format, main

GATEWAY_YAML = """
services:
  - name: api-gw
    type: api
    public: true
    network:
      - host: 0.0.0.0
        port: 80
        protocol: http
"""

GATEWAY_TLS_YAML = """
services:
  - name: api-gw
    type: api
    public: true
    network:
      - host: 0.0.0.0
        port: 443
        protocol: https
    resourceLimits:
      cpu: 1
      memoryMb: 256
"""


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_analyze_prints_violations(tmp_path, capsys):
    path = write(tmp_path, "gw.yaml", GATEWAY_YAML)

    assert main(["analyze", path]) == 0

    out = capsys.readouterr().out
    assert "Config hash: " in out
    assert "Services: 1" in out
    assert "[HIGH] R2_PUBLIC_REQUIRES_TLS @ api-gw" in out
    assert "[MEDIUM] R4_RESOURCE_LIMITS @ api-gw" in out


def test_analyze_fail_on_threshold(tmp_path):
    path = write(tmp_path, "gw.yaml", GATEWAY_YAML)

    assert main(["analyze", path, "--fail-on", "high"]) == 1
    clean = write(tmp_path, "tls.yaml", GATEWAY_TLS_YAML)
    assert main(["analyze", clean, "--fail-on", "low"]) == 0


def test_analyze_parse_error_exits_1(tmp_path, capsys):
    path = write(tmp_path, "bad.yaml", "services: [\n")

    assert main(["analyze", path]) == 1
    assert "Parse / schema errors:" in capsys.readouterr().err


def test_analyze_missing_file(tmp_path, capsys):
    assert main(["analyze", str(tmp_path / "nope.yaml")]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_analyze_json_output(tmp_path, capsys):
    path = write(tmp_path, "gw.yaml", GATEWAY_YAML)

    main(["analyze", path, "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["ir"]["metadata"]["sourceFormat"] == "yaml"
    assert len(payload["violations"]) == 2


def test_diff_command(tmp_path, capsys):
    old = write(tmp_path, "old.yaml", GATEWAY_YAML)
    new = write(tmp_path, "new.yaml", GATEWAY_TLS_YAML)

    assert main(["diff", old, new]) == 0

    out = capsys.readouterr().out
    assert "Resolved violations: 2" in out
    assert "api-gw [risk_decrease]" in out
    assert "2 violation(s) resolved" in out


def test_infer_format(tmp_path):
    assert infer_format(tmp_path / "a.json") == "json"
    assert infer_format(tmp_path / "a.yml") == "yaml"
    assert infer_format(tmp_path / "a.json", "yaml") == "yaml"


def test_diff_parse_error_exits_1(tmp_path, capsys):
    old = write(tmp_path, "old.yaml", GATEWAY_YAML)
    new = write(tmp_path, "new.yaml", "services: [\n")

    assert main(["diff", old, new]) == 1
    assert "Parse / schema errors:" in capsys.readouterr().err


def test_diff_infers_each_side(tmp_path, capsys):
    old = write(tmp_path, "old.json", json.dumps({
        "services": [{"name": "api-gw", "type": "api", "public": True,
                      "network": [{"host": "0.0.0.0", "port": 80, "protocol": "http"}]}]
    }))
    new = write(tmp_path, "new.yaml", GATEWAY_TLS_YAML)

    assert main(["diff", old, new]) == 0
    assert "Resolved violations: 2" in capsys.readouterr().out


def test_infer_format_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_FORMAT", "json")
    assert infer_format(tmp_path / "topology.conf") == "json"

    monkeypatch.setattr(config, "DEFAULT_FORMAT", "yaml")
    assert infer_format(tmp_path / "topology") == "yaml"
