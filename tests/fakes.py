"""
Fake provider API for tests.
Routes are keyed by (method, path); each route holds a queue of canned
responses and the last one repeats once the queue is drained.
"""
import json
from collections import defaultdict, deque
from urllib.parse import parse_qs

import httpx

MAGNET = (
    "magnet:?xt=urn:btih:34FF1FAE9661D72152FB1FC31E27C15297072654"
    "&dn=movie&tr=udp%3A%2F%2Ftracker.example.com%3A1337"
)
INFO_HASH = "34ff1fae9661d72152fb1fc31e27c15297072654"
OTHER_HASH = "1234567890abcdef1234567890abcdef12345678"


class FakeApi:
    def __init__(self, prefix: str = ""):
        self.prefix = prefix.rstrip("/")
        self.routes = defaultdict(deque)
        self.requests = []

    def add(self, method, path, json_body=None, status=200, text=None):
        self.routes[(method, self.prefix + path)].append((status, json_body, text))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(599, text=f"unexpected {request.method} {request.url.path}")
        status, body, text = queue.popleft() if len(queue) > 1 else queue[0]
        if text is not None:
            return httpx.Response(status, text=text)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, content=json.dumps(body), headers={"Content-Type": "application/json"})

    def http(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def calls(self, method, path):
        path = self.prefix + path
        return [r for r in self.requests if r.method == method and r.url.path == path]


def form(request: httpx.Request) -> dict:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def query(request: httpx.Request) -> dict:
    return dict(request.url.params)
