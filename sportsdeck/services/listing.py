"""Paged listing sessions.

A ListingSession backs one list screen (players or teams). It owns two
independent PagedLists:

- browse: league / popular listing, optionally extensible ("load more")
- search: results of the active free-text query

The session is in search mode while a query is set and returned at least
one result; otherwise it is in browse mode. Both modes share one page
cursor, reset to 1 whenever the active list is rebuilt.

Responses are gated per channel (browse, search, detail) by a generation
counter: a response that arrives after a newer request on the same
channel, or after close(), is dropped for display. It may still have
landed in the shared TTL cache.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from sportsdeck.services.favorites import FavoritesSynchronizer
from sportsdeck.services.pagination import PAGE_SIZE, PagedList
from sportsdeck.services.popularity import SampleResult
from sportsdeck.utilities.cache import CacheStore

logger = logging.getLogger(__name__)

MODE_BROWSE = "browse"
MODE_SEARCH = "search"

CHANNEL_BROWSE = "browse"
CHANNEL_SEARCH = "search"
CHANNEL_DETAIL = "detail"

BrowseLoader = Callable[[], Awaitable[list]]
SearchLoader = Callable[[str], Awaitable[list]]
# Called with the 1-based number of the extension batch to fetch
ExtendLoader = Callable[[int], Awaitable[SampleResult]]
DetailLoader = Callable[[str], Awaitable[Any]]


@dataclass
class PageView:
    """What a list screen shows right now."""

    mode: str
    page: int
    items: list = field(default_factory=list)
    total_pages: int = 0
    total_items: int = 0
    has_next: bool = False
    has_previous: bool = False
    query: str = ""
    exhausted: bool = False


class ListingSession:
    """Browse/search paging for one entity type.

    Usage:
        session = ListingSession(
            ENTITY_TEAM,
            browse_loader=lambda: catalog.get_popular_teams(),
            search_loader=catalog.search_teams_by_name,
            favorites=favorites,
        )
        view = await session.load_browse()
        view = await session.next_page()
    """

    def __init__(
        self,
        entity_type: str,
        browse_loader: BrowseLoader,
        search_loader: SearchLoader,
        favorites: FavoritesSynchronizer | None = None,
        extend_loader: ExtendLoader | None = None,
        detail_loader: DetailLoader | None = None,
        cache: CacheStore | None = None,
        page_size: int = PAGE_SIZE,
    ):
        self.entity_type = entity_type
        self._browse_loader = browse_loader
        self._search_loader = search_loader
        self._extend_loader = extend_loader
        self._detail_loader = detail_loader
        self._favorites = favorites
        self._cache = cache

        self._browse = PagedList(page_size=page_size)
        self._search = PagedList(page_size=page_size)
        self._query = ""
        self._current_page = 1
        self._exhausted = False
        self._extending = False
        self._batches = 0
        self._detail: Any = None
        self._closed = False
        self._generations = {CHANNEL_BROWSE: 0, CHANNEL_SEARCH: 0, CHANNEL_DETAIL: 0}

        if favorites is not None:
            favorites.register(self)

    # State

    @property
    def mode(self) -> str:
        if self._query and len(self._search) > 0:
            return MODE_SEARCH
        return MODE_BROWSE

    @property
    def query(self) -> str:
        return self._query

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def browse(self) -> PagedList:
        return self._browse

    @property
    def search_results(self) -> PagedList:
        return self._search

    @property
    def detail(self) -> Any:
        """Entity shown in the detail view, if any."""
        return self._detail

    @property
    def closed(self) -> bool:
        return self._closed

    def _active(self) -> PagedList:
        return self._search if self.mode == MODE_SEARCH else self._browse

    def _can_extend(self) -> bool:
        return (
            self.mode == MODE_BROWSE
            and self._extend_loader is not None
            and not self._exhausted
            and len(self._browse) > 0
        )

    @property
    def no_results(self) -> bool:
        """A query is active but matched nothing."""
        return bool(self._query) and len(self._search) == 0

    def current_view(self) -> PageView:
        if self.no_results:
            return PageView(mode=MODE_SEARCH, page=1, query=self._query)

        listing = self._active()
        return PageView(
            mode=self.mode,
            page=self._current_page,
            items=listing.page(self._current_page),
            total_pages=listing.total_pages,
            total_items=len(listing),
            has_next=listing.has_page(self._current_page + 1) or self._can_extend(),
            has_previous=self._current_page > 1,
            query=self._query,
            exhausted=self._exhausted,
        )

    # Generation gating

    def _begin(self, channel: str) -> int:
        self._generations[channel] += 1
        return self._generations[channel]

    def _is_current(self, channel: str, token: int) -> bool:
        if self._closed or self._generations[channel] != token:
            logger.debug("[LISTING] Ignoring stale %s response for %s", channel, self.entity_type)
            return False
        return True

    def _annotate(self, entities: list) -> list:
        if self._favorites is not None:
            self._favorites.annotate(entities)
        return entities

    # Browse mode

    async def load_browse(self, refresh: bool = False) -> PageView:
        """Load the browse listing, reusing materialized pages unless refreshing."""
        if not refresh and len(self._browse) > 0:
            return self.current_view()

        token = self._begin(CHANNEL_BROWSE)
        items = await self._browse_loader()
        if not self._is_current(CHANNEL_BROWSE, token):
            return self.current_view()

        self._browse.replace(self._annotate(list(items)))
        self._exhausted = False
        self._batches = 0
        if self.mode == MODE_BROWSE:
            self._current_page = 1
        logger.debug("[LISTING] %s browse loaded: %d items", self.entity_type, len(self._browse))
        return self.current_view()

    def reset_browse(self) -> None:
        """Drop the browse pages; the next view or navigation reloads them."""
        self._begin(CHANNEL_BROWSE)
        self._browse.clear()
        self._exhausted = False
        self._batches = 0
        if self.mode == MODE_BROWSE:
            self._current_page = 1

    async def switch_browse(self, loader: BrowseLoader) -> PageView:
        """Replace the browse source (e.g. a league switch) and reload."""
        self._browse_loader = loader
        self._browse.clear()
        if self.mode == MODE_BROWSE:
            self._current_page = 1
        return await self.load_browse(refresh=True)

    # Search mode

    async def search(self, query: str) -> PageView:
        """Run a search; an empty query returns to browse mode."""
        query = query.strip()
        if not query:
            return await self.clear_search()

        token = self._begin(CHANNEL_SEARCH)
        results = await self._search_loader(query)
        if not self._is_current(CHANNEL_SEARCH, token):
            return self.current_view()

        self._query = query
        self._search.replace(self._annotate(list(results)))
        self._current_page = 1
        logger.debug("[LISTING] %s search '%s': %d results", self.entity_type, query, len(self._search))
        return self.current_view()

    async def clear_search(self) -> PageView:
        """Drop the query and show browse page 1 from already-loaded pages."""
        self._begin(CHANNEL_SEARCH)
        self._query = ""
        self._search.clear()
        self._current_page = 1
        if len(self._browse) == 0:
            return await self.load_browse()
        return self.current_view()

    # Navigation

    async def next_page(self) -> PageView:
        """Move forward one page.

        Materialized pages switch immediately. Past the last browse page of
        an extensible source, extension batches are fetched in order until
        one adds new items or the source reports exhaustion. Search mode and
        non-extensible sources stop at their last page.
        """
        if self.no_results:
            return self.current_view()
        if self.mode == MODE_BROWSE and len(self._browse) == 0:
            return await self.load_browse()

        target = self._current_page + 1
        if self._active().has_page(target):
            self._current_page = target
            return self.current_view()

        if not self._can_extend() or self._extending:
            return self.current_view()

        token = self._generations[CHANNEL_BROWSE]
        self._extending = True
        try:
            while True:
                batch = self._batches + 1
                result = await self._extend_loader(batch)
                if not self._is_current(CHANNEL_BROWSE, token):
                    return self.current_view()

                if result.exhausted:
                    logger.info("[LISTING] %s browse exhausted after %d batches", self.entity_type, self._batches)
                    self._exhausted = True
                    return self.current_view()
                if result.error is not None:
                    raise result.error

                self._batches = batch
                added = self._browse.extend(self._annotate(list(result.players)))
                if added:
                    break
                logger.debug("[LISTING] %s batch %d added nothing new", self.entity_type, batch)
        finally:
            self._extending = False

        if self.mode == MODE_BROWSE and self._browse.has_page(target):
            self._current_page = target
        return self.current_view()

    def previous_page(self) -> PageView:
        if self._current_page > 1 and not self.no_results:
            self._current_page -= 1
        return self.current_view()

    async def refresh(self) -> PageView:
        """Pull-to-refresh: reset the TTL cache and reload the active mode."""
        if self._cache is not None:
            self._cache.clear()
        if self._query:
            return await self.search(self._query)
        return await self.load_browse(refresh=True)

    # Detail view

    async def open_detail(self, entity: Any, reload: bool = True) -> Any:
        """Show an entity in the detail view.

        The full record is loaded first unless reload is False (the entity
        already is the full record).
        """
        token = self._begin(CHANNEL_DETAIL)
        detailed = None
        if reload and self._detail_loader is not None:
            detailed = await self._detail_loader(entity.id)
        if not self._is_current(CHANNEL_DETAIL, token):
            return self._detail

        self._detail = detailed or entity
        self._annotate([self._detail])
        return self._detail

    def close_detail(self) -> None:
        self._begin(CHANNEL_DETAIL)
        self._detail = None

    def find(self, entity_id: str) -> Any:
        """First loaded copy of an entity in browse, search or detail."""
        if self._detail is not None and self._detail.id == entity_id:
            return self._detail
        for listing in (self._search, self._browse):
            for item in listing.find(entity_id):
                return item
        return None

    # Favorites

    def apply_favorite(self, entity_type: str, entity_id: str, value: bool) -> int:
        """Set the favorite flag on every loaded copy of an entity."""
        if entity_type != self.entity_type:
            return 0

        updated = 0
        for listing in (self._browse, self._search):
            for item in listing.find(entity_id):
                item.is_favorite = value
                updated += 1
        if self._detail is not None and self._detail.id == entity_id:
            self._detail.is_favorite = value
            updated += 1
        return updated

    def resync_favorites(self) -> None:
        self._annotate(self._browse.items)
        self._annotate(self._search.items)
        if self._detail is not None:
            self._annotate([self._detail])

    def close(self) -> None:
        """End the session; in-flight responses are ignored from now on."""
        self._closed = True
        if self._favorites is not None:
            self._favorites.unregister(self)
