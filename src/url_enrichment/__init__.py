"""
URL Enrichment – resilient pipeline that turns a web page URL into content,
branding and narrated audio for downstream video assembly.

  from url_enrichment.adapters import default_adapters
  from url_enrichment.application.pipeline import VideoPipeline
  from url_enrichment.cli import build_audio, build_extractor
  adapters = default_adapters()
  pipeline = VideoPipeline(extractor=build_extractor(adapters), audio=build_audio(adapters))
  result = pipeline.run("https://example.com", script="...", music_style="lo-fi", duration=30)

Every data source is an unreliable third party: each stage walks an ordered
fallback chain and records what was guessed in the result's warnings.
"""

__version__ = "0.3.0"
