from agentforge.embed import Embed, TextEmbedder, embed_value, to_texts
from agentforge.tool_schema import ToolSchema


def test_embeds_documents():
    schema = ToolSchema(name="nothing", context=None, embedding_docs=["Do nothing."])
    assert to_texts(schema) == ["Do nothing."]


def test_embeds_documents_in_order():
    schema = ToolSchema(name="calc", context={"x": 1}, embedding_docs=["add", "sum", "plus"])
    embedder = TextEmbedder()
    schema.embed(embedder)
    assert embedder.texts == ["add", "sum", "plus"]


def test_context_is_not_embedded():
    schema = ToolSchema(name="calc", context={"secret_context": "hidden"}, embedding_docs=[])
    assert to_texts(schema) == []


def test_defaults():
    schema = ToolSchema()
    assert schema.name == ""
    assert schema.context is None
    assert schema.embedding_docs == []


def test_equality():
    first = ToolSchema(name="a", context=[1], embedding_docs=["x"])
    second = ToolSchema(name="a", context=[1], embedding_docs=["x"])
    assert first == second
    assert (first == ToolSchema(name="b", context=[1], embedding_docs=["x"])) is False


def test_is_embed():
    schema = ToolSchema(name="a", embedding_docs=["x"])
    assert isinstance(schema, Embed)
    embedder = TextEmbedder()
    embed_value(schema, embedder)
    assert embedder.texts == ["x"]


def test_list_of_schemas():
    schemas = [
        ToolSchema(name="a", embedding_docs=["one"]),
        ToolSchema(name="b", embedding_docs=["two", "three"]),
    ]
    assert to_texts(schemas) == ["one", "two", "three"]