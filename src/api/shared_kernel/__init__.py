"""Shared Kernel module.

This module contains foundational components that are shared by the
bounded contexts of the bridge: shop session authentication and the
request context middleware. Changes here affect every context and
should be carefully coordinated.
"""
