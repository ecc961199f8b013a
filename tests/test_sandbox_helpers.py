"""Tests for sandbox helper functions."""

from __future__ import annotations

from scripts.esign_sandbox import build_scenarios, extract_flow_id


class TestExtractFlowId:
    def test_reads_flow_id_line(self):
        text = "Success!\nFlow ID: 4f1c9e\nSign URL: http://localhost:8084/s/4f1c9e"
        assert extract_flow_id(text) == "4f1c9e"

    def test_returns_empty_string_without_flow_id(self):
        assert extract_flow_id("Error: Sign flow creation failed: bad signer") == ""


class TestBuildScenarios:
    def test_urls_use_host(self):
        scenarios = build_scenarios("http://localhost:9000")
        assert [s.num for s in scenarios] == [1, 2, 3, 4]
        assert scenarios[0].file_path == "http://localhost:9000/samples/contract.pdf"
        assert scenarios[0].query_after is True
