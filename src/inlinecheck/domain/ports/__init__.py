"""Ports: protocols implemented by analyzers and users."""

from inlinecheck.domain.ports.visitor import NodeVisitor

__all__ = ["NodeVisitor"]
