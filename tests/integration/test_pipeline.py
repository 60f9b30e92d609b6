"""
Integration tests for renderer props, the VideoPipeline and the CLI.
"""

import json

import pytest

from conftest import FakeBrowser, FakeFetcher, FakeMusic, FakeNarration
from url_enrichment.adapters.logos import GoogleFaviconSource
from url_enrichment.application.pipeline import VideoPipeline
from url_enrichment.application.props import build_render_props
from url_enrichment.cli import main
from url_enrichment.domain.results import Failure
from url_enrichment.ports.interfaces import IStructuredExtractor, IVideoRenderer

SCRIPT = "Meet Example. It is fast."


class OfflineExtractor(IStructuredExtractor):
    name = "tabstack"

    def extract(self, url):
        return Failure("offline")


class RecordingRenderer(IVideoRenderer):
    def __init__(self):
        self.calls = []

    def render(self, props, output_name):
        self.calls.append((props, output_name))
        return {"videoPath": f"/videos/{output_name}.mp4", "duration": props["duration"], "fileSize": 1234}


def fake_adapters(snapshot, asset_store, **overrides):
    adapters = {
        "browser": FakeBrowser(snapshot),
        "structured_extractor": OfflineExtractor(),
        "logo_sources": [GoogleFaviconSource()],
        "fetcher": FakeFetcher(),
        "asset_store": asset_store,
        "narration_providers": [FakeNarration()],
        "music_providers": [FakeMusic()],
        "beat_strategies": [],
        "video_renderer": None,
    }
    adapters.update(overrides)
    return adapters


class TestRenderProps:
    def test_every_field_populated(self, build_extractor, build_audio, snapshot):
        site = build_extractor(browser=FakeBrowser(snapshot), logo_sources=[GoogleFaviconSource()]).extract_url_content(
            "https://example.com"
        )
        audio = build_audio().generate_audio("lo-fi", SCRIPT, 15)
        props = build_render_props(site, audio, 15)

        assert set(props) == {"content", "branding", "audio", "metadata", "duration"}
        assert props["duration"] == 15.0
        assert props["audio"]["music"]["localPath"] == ""
        assert props["audio"]["beats"]
        assert "warnings" not in props["audio"]
        assert props["metadata"]["extractionMethod"] == "playwright-fallback"
        assert props["branding"]["logo"]["staticPath"] == "images/logo-example.com.png"

        def no_none(value):
            if isinstance(value, dict):
                return all(no_none(v) for v in value.values())
            if isinstance(value, list):
                return all(no_none(v) for v in value)
            return value is not None

        assert no_none(props)
        json.dumps(props)

    def test_without_audio_step(self, build_extractor):
        site = build_extractor().extract_url_content("https://example.com")
        props = build_render_props(site, None, 10)
        assert props["audio"]["beats"] == []
        assert props["audio"]["narration"]["timecodes"] == []


class TestVideoPipeline:
    def test_run_with_renderer(self, snapshot, asset_store):
        from url_enrichment.cli import build_audio, build_extractor

        adapters = fake_adapters(snapshot, asset_store)
        renderer = RecordingRenderer()
        pipeline = VideoPipeline(
            extractor=build_extractor(adapters), audio=build_audio(adapters), video_renderer=renderer
        )
        result = pipeline.run("https://example.com", SCRIPT, "jazz", 12, output_name="example")

        assert result["render"] == {"videoPath": "/videos/example.mp4", "duration": 12.0, "fileSize": 1234}
        assert renderer.calls[0][0]["content"]["title"] == "Welcome"
        assert any("tabstack failed: offline" in w for w in result["warnings"])

    def test_run_without_renderer(self, snapshot, asset_store):
        from url_enrichment.cli import build_audio, build_extractor

        adapters = fake_adapters(snapshot, asset_store)
        result = VideoPipeline(extractor=build_extractor(adapters), audio=build_audio(adapters)).run(
            "https://example.com", SCRIPT
        )
        assert result["render"] is None
        assert result["props"]["duration"] == 30.0

    def test_bad_arguments_fail_fast(self, snapshot, asset_store):
        from url_enrichment.cli import build_audio, build_extractor

        browser = FakeBrowser(snapshot)
        adapters = fake_adapters(snapshot, asset_store, browser=browser)
        pipeline = VideoPipeline(extractor=build_extractor(adapters), audio=build_audio(adapters))
        with pytest.raises(ValueError):
            pipeline.run("https://example.com", SCRIPT, duration=0)
        assert browser.calls == []


class TestCli:
    def test_extract_writes_json(self, snapshot, asset_store, tmp_path):
        output = tmp_path / "site.json"
        code = main(["extract", "https://example.com", "--output", str(output)], fake_adapters(snapshot, asset_store))

        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["extractionMethod"] == "playwright-fallback"
        assert data["content"]["title"] == "Welcome"

    def test_audio_prints_json(self, snapshot, asset_store, capsys):
        code = main(["audio", "--script", SCRIPT, "--duration", "8"], fake_adapters(snapshot, asset_store))
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["music"]["duration"] == 8.0

    def test_stdout_is_pure_json(self, snapshot, asset_store, capsys):
        code = main(["extract", "https://example.com"], fake_adapters(snapshot, asset_store))
        captured = capsys.readouterr()

        assert code == 0
        assert json.loads(captured.out)["content"]["title"] == "Welcome"
        assert "Extracting content from: https://example.com" in captured.err

    def test_run_prints_json(self, snapshot, asset_store, capsys):
        code = main(["run", "https://example.com", "--script", SCRIPT, "--duration", "6"],
                    fake_adapters(snapshot, asset_store))
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["props"]["duration"] == 6.0
        assert data["render"] is None

    def test_invalid_url_exit_code(self, snapshot, asset_store):
        assert main(["extract", "example"], fake_adapters(snapshot, asset_store)) == 2
