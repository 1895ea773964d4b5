"""
HTTP layer.

``deps`` holds the shared dependencies; each versioned subpackage
(currently only ``v1``) exposes one ``router`` mounted by ``main``.
"""
