"""Image relay application.

Accepts generation requests, forwards them to the Freepik Mystic API and
resolves asynchronous provider tasks into a stable ``{url}`` response.
"""
