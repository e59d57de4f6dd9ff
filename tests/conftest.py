"""Shared fixtures for the fuzzy ranker test suite."""

import pytest


BOOKS = [
    {"title": "Old Man's War", "author": "John Scalzi"},
    {"title": "The Lock Artist", "author": "Steve Hamilton"},
    {"title": "HTML5", "author": "Remy Sharp"},
    {"title": "Right Ho Jeeves", "author": "P.D. Woodhouse"},
    {"title": "The Code of the Wooster", "author": "P.D. Woodhouse"},
    {"title": "Thank You Jeeves", "author": "P.D. Woodhouse"},
    {"title": "The DaVinci Code", "author": "Dan Brown"},
    {"title": "Angels & Demons", "author": "Dan Brown"},
    {"title": "The Silmarillion", "author": "J.R.R Tolkien"},
    {"title": "Syrup", "author": "Max Barry"},
    {"title": "The Lost Symbol", "author": "Dan Brown"},
    {"title": "The Book of Lies", "author": "Brad Meltzer"},
    {"title": "Lamb", "author": "Christopher Moore"},
    {"title": "Fool", "author": "Christopher Moore"},
    {"title": "Incompetence", "author": "Rob Grant"},
    {"title": "Fat", "author": "Rob Grant"},
    {"title": "Colony", "author": "Rob Grant"},
    {"title": "Backwards, Red Dwarf", "author": "Rob Grant"},
    {"title": "The Grand Design", "author": "Stephen Hawking"},
    {"title": "The Book of Samson", "author": "David Maine"},
    {"title": "The Preservationist", "author": "David Maine"},
    {"title": "Fallen", "author": "David Maine"},
    {"title": "Monster 1959", "author": "David Maine"},
    {"title": "the wooster code", "author": "aa"},
    {"title": "The code of the wooster", "author": "aa"},
]


@pytest.fixture
def books():
    """Small library of book records with title and author fields."""
    return [dict(book) for book in BOOKS]


@pytest.fixture
def fruits():
    """Flat list of fruit names."""
    return ["Apple", "Orange", "Banana"]


@pytest.fixture
def isbn_books():
    """Book records identified by ISBN."""
    return [
        {"ISBN": "0765348276", "title": "Old Man's War", "author": "John Scalzi"},
        {"ISBN": "0312696957", "title": "The Lock Artist", "author": "Steve Hamilton"},
    ]
