"""
AnimeFLV Source - Adapter for animeflv.net (Spanish).
"""

import logging
from typing import List

from anisources.core.models import AnimeSummary, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.hrefs import animeflv_anime


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIMEFLV,
    language="es",
    description="Spanish subbed anime",
    listing_url="https://www3.animeflv.net/",
    origin="https://www3.animeflv.net",
)


class AnimeFLVSource(BaseSource):
    """Adapter for AnimeFLV; listing links point at episodes ("/ver/x-12")."""

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            raw_href = link.attr("href") if link else ""
            return self._summary(
                title=item.select_text("strong.Title"),
                image_url=self.absolute(item.select_attr("img", "src")),
                href=self.absolute(animeflv_anime(raw_href)) if raw_href else "",
            )

        return self._collect(doc.select("ul.ListEpisodios li"), build)


__all__ = ["AnimeFLVSource", "source_metadata"]
