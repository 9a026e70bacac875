"""inkwell stats: streak, totals, moods and weekly insights."""

from __future__ import annotations

import asyncio

import click
from rich.table import Table

from .common import console, load_config, open_store


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show your writing streak, totals and mood breakdown."""
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            summary = store.stats
            insights = store.insights

            console.print(f"Entries: {summary.total_entries}")
            console.print(f"Words: {summary.total_words}")
            console.print(f"Streak: {summary.streak_days} days")
            console.print(f"Words this week: {insights.weekly_words}")
            if summary.most_used_mood:
                console.print(f"Most used mood: {summary.most_used_mood.value}")
            if insights.trending_tag:
                console.print(f"Trending tag: #{insights.trending_tag}")
            if insights.hours_since_last_entry is not None:
                console.print(f"Last entry: {insights.hours_since_last_entry}h ago")

            table = Table(show_header=True, header_style="bold")
            table.add_column("Mood")
            table.add_column("Entries", justify="right")
            for mood, count in summary.mood_counts.items():
                table.add_row(mood.value, str(count))
            console.print(table)

    asyncio.run(_run())
