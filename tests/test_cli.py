"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

import pytest
import main
from errors import UpstreamError
from orchestrator import ObjectionHandlerOrchestrator

from conftest import ScriptedLLMClient, queue_happy_path, REPLY_TEXT


class TestCLI:
    """Test exit codes and output."""

    def setup_method(self):
        self.client = ScriptedLLMClient()

    def _run(self, argv):
        def build(settings):
            return ObjectionHandlerOrchestrator(settings=settings, llm_client=self.client)

        with patch("main.ObjectionHandlerOrchestrator", side_effect=build), \
                patch("main.configure_logging"):
            return main.main(argv)

    def test_prints_reply(self, capsys):
        queue_happy_path(self.client)

        code = self._run(["-i", "Too expensive", "-s", "value-focused sales"])

        assert code == main.EXIT_OK
        out = capsys.readouterr().out
        assert REPLY_TEXT.strip() in out
        assert "Intent: objection" in out

    def test_json_output(self, capsys):
        queue_happy_path(self.client)

        self._run(["-i", "Too expensive", "-s", "value-focused sales", "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert payload["metadata"]["sessionId"]

    def test_missing_input(self, capsys):
        code = self._run(["-s", "value-focused sales"])

        assert code == main.EXIT_INVALID
        assert "Missing required parameters" in capsys.readouterr().err
        assert self.client.calls == []

    def test_upstream_failure(self, capsys):
        self.client.queue(UpstreamError("down"))

        code = self._run(["-i", "Too expensive", "-s", "value-focused sales"])

        assert code == main.EXIT_FAILED
        captured = capsys.readouterr()
        assert "down" in captured.err
        assert "I understand your point" in captured.out

    def test_rejects_unknown_provider(self):
        with pytest.raises(SystemExit):
            main.main(["--provider", "cohere"])
