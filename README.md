# agentforge

Small, composable building blocks for applications built on large language
models. The package has no runtime dependencies. It does not talk to any
provider by itself: you supply a completion model, and agentforge does the rest.

- **Completion requests**: `CompletionRequest` and `CompletionRequestBuilder`
  collect a prompt, a preamble (system prompt), chat history, context
  documents, tool definitions, temperature, a token limit and
  provider-specific parameters.
- **Agents**: `AgentBuilder` pairs a `CompletionModel` with a preamble and
  static context documents, and builds an `Agent`. An `Agent` can be prompted
  once or used for a chat with history.
- **Embeddings**: `Embedding`, the `EmbeddingModel` interface, the `Embed`
  protocol with `TextEmbedder` and `to_texts`, and the `embeddable` class
  decorator with `embed_field` for custom field embedders.
- **Vector distances**: `dot_product`, `cosine_similarity`,
  `angular_distance`, `euclidean_distance`, `manhattan_distance` and
  `chebyshev_distance`.
- **File loading**: `FileLoader` reads files chosen by a glob pattern or from
  a directory, lazily and with errors kept per file.
- **Chat loop**: `cli_chatbot` runs an interactive read–reply loop over any
  object that implements `Chat`.

## Plugging in a model

Subclass `CompletionModel` and implement its async `completion` method. The
method receives a `CompletionRequest` and returns a `CompletionResponse`. The
response's choice is either a `MessageChoice` (a text reply) or a
`ToolCallChoice` (a tool name with its JSON arguments).

```python
import asyncio

from agentforge.agent import AgentBuilder
from agentforge.completion import CompletionModel, CompletionResponse, MessageChoice


class EchoModel(CompletionModel):
    async def completion(self, request):
        text = request.prompt_with_context()
        return CompletionResponse(choice=MessageChoice(text), raw_response=text)


agent = (
    AgentBuilder(EchoModel())
    .preamble("You are a helpful assistant.")
    .context("Definition of a *flurbo*: a green alien that lives on cold planets")
    .temperature(0.5)
    .build()
)

print(asyncio.run(agent.prompt("What is a flurbo?")))
```

`Agent.chat(prompt, chat_history)` works in the same way and also takes a list
of `Message` objects. `Agent.completion(prompt, chat_history)` returns the
pre-filled `CompletionRequestBuilder`. You can adjust it (for example with
`.temperature(0.9)`) before you call `await builder.send()`.

Context documents are placed before the prompt like this:

```
<attachments>
<file id: static_doc_0>
...
</file>
</attachments>

What is a flurbo?
```

## Provider-specific parameters

`CompletionRequestBuilder.additional_params` merges a new JSON object into the
parameters already set. Keys in the new object win. To replace the parameters
outright, use `replace_additional_params`. The same merge rule is available
directly as `agentforge.json_utils.merge` and `merge_inplace`.

## Embeddings and distances

```python
from agentforge.distance import cosine_similarity, euclidean_distance
from agentforge.embedding import Embedding

a = Embedding(document="a", vec=[1.0, 2.0, 3.0])
b = Embedding(document="b", vec=[1.0, 5.0, 7.0])

euclidean_distance(a, b)         # 5.0
cosine_similarity(a, b, False)   # 0.9875414397573881
```

Two `Embedding` values are equal when their documents are equal.

`to_texts(item)` collects the texts that an object wants embedded. Plain
strings, numbers, booleans, JSON values and lists of these all work.
Decorating a class with `embeddable` makes its marked fields embeddable.

## Loading files

```python
from agentforge.loaders import FileLoader

for content in FileLoader.with_glob("notes/*.txt").read().ignore_errors():
    print(content)

for path, content in FileLoader.with_dir("notes").read_with_path().ignore_errors():
    print(path, len(content))
```

If you do not call `ignore_errors`, a file that cannot be read comes through as
a `FileLoaderError` item and does not stop the iteration.

## Interactive chat

`cli_chatbot(chatbot, stdin, stdout)` reads prompts line by line and keeps the
chat history. It prints each response between separator lines. Typing `exit`
ends the loop.