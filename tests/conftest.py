import os
import random
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from controller import GameController
from scheduler import Scheduler
from settings import Settings


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def controller(clock, rng):
    return GameController(Settings(), scheduler=Scheduler(clock), rng=rng)


def pair_ids(deck):
    '''Map each symbol to the ids of its two cards.'''
    pairs = {}
    for card in deck:
        pairs.setdefault(card.symbol, []).append(card.id)
    return pairs


def mismatched_ids(deck):
    first = deck[0]
    other = next(c for c in deck if c.symbol != first.symbol)
    return first.id, other.id
