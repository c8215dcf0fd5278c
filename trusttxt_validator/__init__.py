"""
trusttxt-validator: resolves trust:// URIs against published trust.txt manifests.

Follows a Trust URI found on a page to the organization's
/.well-known/trust.txt, checks whether the page's own URL is listed there,
and caches the outcome per page. Modular layout: manifest (URI, fetch,
parse), platforms (account canonicalization), engine (matching), cache,
presentation, lookup service and API server.
"""

__version__ = "0.1.0"
