"""
Tests for the safetygate command-line interface.
"""
import io
import json
import logging

import pytest
import yaml

from safetygate.cli import EXIT_BLOCKED, EXIT_ERROR, EXIT_OK, main

from tests.conftest import CRIMINAL_TEXT, HEDGED_TEXT, PII_TEXT


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    for name in (
        "SAFETYGATE_LOG_LEVEL",
        "SAFETYGATE_DEFAULT_COURT",
        "SAFETYGATE_DEFAULT_FILING",
        "SAFETYGATE_DEFAULT_MODE",
        "SAFETYGATE_PHRASE_PACK",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SAFETYGATE_LOG_FORMAT", "text")
    yield
    logger = logging.getLogger("safetygate")
    for handler in list(logger.handlers):
        if getattr(handler, "_safetygate", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def narrative(tmp_path):
    def write(text, name="narrative.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write


# =============================================================================
# Scan Command
# =============================================================================

class TestScan:

    def test_blocked_scan_text_report(self, narrative, capsys):
        code = main(["scan", narrative(CRIMINAL_TEXT), "--mode", "court_mode"])
        out = capsys.readouterr().out
        assert code == EXIT_BLOCKED
        assert "[CRITICAL_RISK]" in out
        assert "REWRITTEN TEXT" in out
        assert "May it please this Honourable Islamabad High Court," in out

    def test_clean_scan_json(self, narrative, capsys):
        code = main(["scan", narrative(HEDGED_TEXT), "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["decision"]["overall"] == "LOW"
        assert len(payload["seal"]) == 64

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(PII_TEXT))
        code = main(["scan", "--json", "--mode", "public"])
        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_BLOCKED
        assert "[CNIC REDACTED]" in payload["rewrite_plan"]["rewritten_text"]

    def test_admin_override(self, narrative, capsys):
        code = main(["scan", narrative(CRIMINAL_TEXT), "--admin-override"])
        assert code == EXIT_OK

    def test_court_pair(self, narrative, capsys):
        main(["scan", narrative(CRIMINAL_TEXT), "--mode", "court_mode", "--court", "SC",
              "--filing", "writ", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["court"] == {"court_style": "SC", "filing_type": "writ"}

    def test_context_file(self, narrative, tmp_path, capsys):
        context = tmp_path / "context.json"
        context.write_text(json.dumps({
            "evidenceArtifacts": [{"id": "EV-1", "artifact_value": "Audit found fraud"}],
        }), encoding="utf-8")
        code = main(["scan", narrative(CRIMINAL_TEXT), "--mode", "court_mode",
                     "--context", str(context), "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_BLOCKED
        assert not [w for w in payload["warnings"] if w["code"] == "COURT_EVIDENCE_GAP"]

    def test_missing_file(self, tmp_path, capsys):
        code = main(["scan", str(tmp_path / "missing.txt")])
        assert code == EXIT_ERROR
        assert "error: [SG_INVALID_INPUT]" in capsys.readouterr().err

    def test_context_must_be_object(self, narrative, tmp_path, capsys):
        context = tmp_path / "context.json"
        context.write_text("[1, 2]", encoding="utf-8")
        code = main(["scan", narrative(CRIMINAL_TEXT), "--context", str(context)])
        assert code == EXIT_ERROR
        assert "JSON object" in capsys.readouterr().err


# =============================================================================
# Phrases / Front-Matter Commands
# =============================================================================

class TestPhrases:

    def test_phrases(self, capsys):
        assert main(["phrases", "--court", "LHC", "--filing", "writ"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Phrases for LHC / writ" in out
        assert "submission_open:" in out
        assert "  - May it please this Honourable Lahore High Court," in out

    def test_phrases_default_pair(self, capsys):
        assert main(["phrases"]) == EXIT_OK
        assert "Phrases for IHC / writ" in capsys.readouterr().out

    def test_phrase_pack(self, tmp_path, capsys):
        pack = tmp_path / "pack.yaml"
        pack.write_text(yaml.safe_dump({
            "schema_version": "1.0.0",
            "id": "pk-test",
            "overrides": [{
                "court_style": "SC",
                "filing_type": "criminal_misc",
                "phrases": {"submission_open": ["May it please this Honourable Apex Court,"]},
            }],
        }), encoding="utf-8")
        code = main(["phrases", "--court", "SC", "--filing", "criminal_misc",
                     "--phrase-pack", str(pack)])
        assert code == EXIT_OK
        assert "Apex Court" in capsys.readouterr().out

    def test_bad_phrase_pack(self, tmp_path, capsys):
        code = main(["phrases", "--phrase-pack", str(tmp_path / "none.yaml")])
        assert code == EXIT_ERROR
        assert "SG_PHRASE_PACK_LOAD_ERROR" in capsys.readouterr().err


class TestFrontMatter:

    def test_court_front_matter(self, capsys):
        code = main(["front-matter", "--mode", "court_mode", "--court", "IHC",
                     "--filing", "writ", "--events", "1200", "--case-title", "State v. Khan"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "Methodology & Scope" in out
        assert "1,200 events" in out
        assert "Court Filing Note:" in out
        assert "6. Court filings must be reviewed" in out


class TestMain:

    def test_no_command(self, capsys):
        assert main([]) == EXIT_ERROR

    def test_bad_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("SAFETYGATE_DEFAULT_MODE", "secret")
        assert main(["phrases"]) == EXIT_ERROR
        assert "SG_CONFIGURATION_ERROR" in capsys.readouterr().err
