"""Wire payloads recorded from the API, one per endpoint shape."""

import json

ENGINES = {
    "object": "list",
    "data": [
        {"id": "ada", "object": "engine", "owner": "openai", "ready": True},
        {"id": "babbage", "object": "engine", "owner": "openai", "ready": True},
        {
            "id": "code-cushman-001",
            "object": "engine",
            "owner": "openai",
            "ready": True,
            "created": 1626307200,
        },
        {"id": "curie", "object": "engine", "owner": "openai", "ready": True},
        {"id": "davinci", "object": "engine", "owner": "openai", "ready": True},
        {
            "id": "ada-code-search-code",
            "object": "engine",
            "owner": "openai-dev",
            "ready": False,
        },
    ],
}

ENGINE_ADA = {"id": "ada", "owner": "openai", "ready": True}

COMPLETION = {
    "id": "cmpl-39DDgiNB7jh1k9GrmRvYmGChlZA6G",
    "created": 1623324780,
    "model": "davinci:2020-05-03",
    "choices": [
        {
            "index": 0,
            "text": '\nMake chili (traditionally "chili con carne" (literally "chili with',
            "finish_reason": "length",
        }
    ],
}

CONTENT_FILTER = {
    "id": "cmpl-40AKATjmi5zugJr8nGfHTDbo7SR7G",
    "object": "text_completion",
    "created": 1635945034,
    "model": "toxicity-double-18",
    "choices": [
        {
            "text": "0",
            "index": 0,
            "logprobs": {
                "tokens": ["0"],
                "token_logprobs": [-0.001167275],
                "top_logprobs": [
                    {
                        "0": -0.001167275,
                        "1": -8.242511,
                        "2": -7.0130115,
                        "3": -14.688963,
                        "5": -15.609307,
                    }
                ],
                "text_offset": [133],
            },
            "finish_reason": "length",
        }
    ],
}

SEARCH = [
    {"document": 0, "score": 487.666},
    {"document": 1, "score": 240.29499999999999},
    {"document": 2, "score": 156.67099999999999},
]

CLASSIFICATION = {
    "search_model": "ada",
    "label": "Negative",
    "model": "curie:2020-05-03",
    "selected_examples": [
        {"document": 1, "label": "Negative", "text": "I am sad."},
        {"document": 0, "label": "Positive", "text": "A happy moment"},
        {"document": 2, "label": "Positive", "text": "I am feeling awesome"},
    ],
    "completion": "cmpl-39DDfnON0L1z1wO6iU5IUMriRPPbH",
}

CLASSIFICATION_FROM_FILE = {
    "search_model": "ada",
    "label": "Positive",
    "model": "curie",
    "selected_examples": [
        {"file": "file-4Bd2c9rkDhcXEjHnuqR6xBVm", "label": "Positive", "text": "A happy moment"},
    ],
    "completion": "cmpl-3XsSgmFzBYqCN4h3CwdnMRRHH1NXN",
}

ANSWERS = {
    "search_model": "ada",
    "answers": ["puppy A."],
    "model": "curie:2020-05-03",
    "completion": "cmpl-39DDfoafHcHQAbqMk7AUNyhyshLQo",
    "selected_documents": [
        {"document": 0, "text": "Puppy A is happy. "},
        {"document": 1, "text": "Puppy B is sad. "},
    ],
}

FILE = {
    "id": "file-XjGxS3KTG0uNmNOK362iJua3",
    "object": "file",
    "bytes": 140,
    "created_at": 1613779121,
    "filename": "puppy.jsonl",
    "purpose": "search",
}

FILES = {"object": "list", "data": [FILE]}

DELETED_FILE = {"id": "file-XjGxS3KTG0uNmNOK362iJua3", "object": "file", "deleted": True}

ERROR = {
    "error": {
        "type": "invalid_request_error",
        "code": None,
        "param": "max_tokens",
        "message": "max_tokens must be at most 2048",
    }
}

BARE_ERROR = {
    "type": "invalid_request_error",
    "code": 404,
    "param": None,
    "message": "No such engine: nope",
}


def as_bytes(payload: object) -> bytes:
    return json.dumps(payload).encode("utf-8")
