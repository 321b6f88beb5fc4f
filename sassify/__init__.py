"""Sassify: SaaS incubator backend (public site, AI blog, billing webhooks and admin back-office)."""

__version__ = "0.1.0"
