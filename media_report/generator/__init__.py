"""Report export package — PPTX deck builder.

Consumes a ReportView to produce a PowerPoint file, one slide per page.

Modules:
    deck_builder: Cover, contents and module slides
    charts: Sentiment trend and top sources charts
"""

from .charts import add_chart, add_sentiment_chart, add_source_chart
from .deck_builder import DeckBuilder, build_deck

__all__ = [
    "DeckBuilder",
    "build_deck",
    "add_chart",
    "add_sentiment_chart",
    "add_source_chart",
]
