"""
Scrolling feed example

A fake repository serving 300 posts with one second of latency, wrapped in a
data source and driven by a Paginator the way a list view would drive it.
"""

import asyncio
import logging
import random
from dataclasses import dataclass

from pagerflow import Paginator, PaginatorState

ICONS = ["home", "favorite", "settings", "email", "phone", "person", "star", "share"]


@dataclass(frozen=True)
class Post:
    title: str
    description: str
    icon: str


class PostRepository:
    def __init__(self) -> None:
        self.posts = [
            Post(f"Dummy title {i}", f"Dummy description {i}", random.choice(ICONS))
            for i in range(1, 301)
        ]

    async def list_posts(self, page: int, page_size: int) -> list[Post]:
        await asyncio.sleep(1)
        start = page * page_size
        return self.posts[start : start + page_size]


class PostSource:
    """Data source delegating to the repository. Failures could be handled here too."""

    def __init__(self, repository: PostRepository) -> None:
        self.repository = repository

    async def fetch(self, page: int, page_size: int) -> list[Post]:
        return await self.repository.list_posts(page=page, page_size=page_size)


def render(state: PaginatorState[Post]) -> None:
    print(
        f"[{state.phase.value:>15}] page={state.current_page} items={state.item_count}"
        + (f" error={state.error}" if state.error else "")
    )


async def main() -> None:
    async with Paginator(PostSource(PostRepository())) as paginator:
        paginator.state.observe(render)
        paginator.error_event.observe(lambda error: print(f"Toast: {error}"))

        # Scroll to the bottom of the list after every load
        with paginator.state.subscribe() as states:
            async for state in states:
                if state.maximum_reached:
                    break
                if not state.is_loading and state.items:
                    paginator.on_item_visible(state.item_count - 1)

        print(f"Done: {paginator.current_state.item_count} posts loaded")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
