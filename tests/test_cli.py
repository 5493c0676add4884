# tests/test_cli.py

from __future__ import annotations

import asyncio
import logging

import pytest

from threadpulse.cli.main import _build_parser, run_demo
from threadpulse.config import get_settings


@pytest.mark.asyncio
@pytest.mark.parametrize("threads_type", ["concurrent", "sequential", "priority"])
async def test_run_demo_finishes(threads_type: str, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="threadpulse.cli.main"):
        await asyncio.wait_for(run_demo(threads_type, "extreme", units=2, steps=3), timeout=5)

    assert "unit-1 done" in caplog.text
    assert "unit-2 done" in caplog.text


def test_parser_validates_choices() -> None:
    parser = _build_parser(get_settings())
    args = parser.parse_args(["--type", "priority", "--priority", "low", "--units", "4"])
    assert (args.type, args.priority, args.units, args.steps) == ("priority", "low", 4, 5)

    with pytest.raises(SystemExit):
        parser.parse_args(["--type", "parallel"])
