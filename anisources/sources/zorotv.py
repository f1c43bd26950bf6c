"""
ZoroTv Source - Adapter for zorotv.com.in (English).

Only the update listing is scraped; the site reuses a WordPress
theme whose cards carry the latest episode in an h6.
"""

import logging
from typing import List

from anisources.core.models import AnimeSummary, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ZOROTV,
    language="en",
    description="English subbed anime",
    listing_url="https://zorotv.com.in/anime/?status=&type=&order=update",
    origin="https://zorotv.com.in",
)


class ZoroTvSource(BaseSource):
    """Adapter for ZoroTv."""

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("h2"),
                image_url=item.select_attr("img", "src"),
                href=item.select_attr("a", "href"),
                episode_label=item.select_text("div.anime__sidebar__comment__item__text h6")
                .replace("Episodio ", "").strip(),
            )

        return self._collect(doc.select("div.listupd article.bs"), build)


__all__ = ["ZoroTvSource", "source_metadata"]
