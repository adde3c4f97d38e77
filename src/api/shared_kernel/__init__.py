"""Shared Kernel module.

Components shared across bounded contexts: the observation context carried
by every domain probe and signed webhook verification. Changes here affect
every context that depends on them.
"""
