import json
from dataclasses import dataclass

import pytest

from agentforge.embed import (
    Embed,
    EmbedError,
    TextEmbedder,
    embed_field,
    embed_value,
    embeddable,
    to_texts,
)


class WordDefinition(Embed):
    def __init__(self, word, definitions):
        self.word = word
        self.definitions = definitions

    def embed(self, embedder):
        for part in self.definitions.split(","):
            embedder.embed(part)


def split_words(embedder, value):
    for word in value.split():
        embedder.embed(word)


def failing(embedder, value):
    raise ValueError("bad value")


@embeddable
@dataclass
class Greetings:
    message: str = embed_field()


@embeddable
@dataclass
class Mixed:
    ident: str
    sentence: str = embed_field(embed_with=split_words)
    title: str = embed_field()


@embeddable
@dataclass
class Broken:
    value: str = embed_field(embed_with=failing)


@dataclass
class Unmarked:
    value: str


class Plain:
    pass


def test_text_embedder_accumulates():
    embedder = TextEmbedder()
    embedder.embed("one")
    embedder.embed("two")
    assert embedder.texts == ["one", "two"]


def test_string():
    assert to_texts("Hello, world!") == ["Hello, world!"]


def test_integer():
    assert to_texts(7) == [str(7)]


def test_booleans():
    assert to_texts(True) == ["true"]
    assert to_texts(False) == ["false"]


def test_integral_float_has_no_fraction():
    assert to_texts(2.0) == ["2"]


def test_fractional_float_round_trips():
    (text,) = to_texts(0.25)
    assert float(text) == 0.25


def test_dict_embedded_as_json():
    (text,) = to_texts({"a": 1, "b": [True, None]})
    assert json.loads(text) == {"a": 1, "b": [True, None]}
    assert " " not in text


def test_none_embedded_as_json_null():
    (text,) = to_texts(None)
    assert json.loads(text) is None


def test_list_flattens_in_order():
    assert to_texts(["a", ["b", "c"], "d"]) == ["a", "b", "c", "d"]


def test_custom_embed_subclass():
    item = WordDefinition("apple", "a fruit, a tech company")
    assert to_texts(item) == ["a fruit", " a tech company"]


def test_embed_value_appends_to_existing_embedder():
    embedder = TextEmbedder()
    embedder.embed("first")
    embed_value(["x", "y"], embedder)
    assert embedder.texts == ["first", "x", "y"]


def test_embeddable_dataclass():
    assert to_texts(Greetings(message="Hello, world!")) == ["Hello, world!"]
    assert isinstance(Greetings("x"), Embed)


def test_list_of_embeddables():
    items = [Greetings("Hello, world!"), Greetings("Goodbye, world!")]
    assert to_texts(items) == ["Hello, world!", "Goodbye, world!"]


def test_unmarked_fields_skipped_and_basic_before_custom():
    item = Mixed(ident="id-1", sentence="two words", title="Title")
    assert to_texts(item) == ["Title", "two", "words"]


def test_custom_function_error_becomes_embed_error():
    with pytest.raises(EmbedError, match="bad value"):
        to_texts(Broken(value="x"))


def test_embeddable_requires_marked_field():
    with pytest.raises(TypeError):
        embeddable(Unmarked)


def test_embeddable_requires_dataclass():
    with pytest.raises(TypeError):
        embeddable(Plain)


def test_embed_with_must_be_callable():
    with pytest.raises(TypeError):
        embed_field(embed_with="not callable")


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        to_texts(object())