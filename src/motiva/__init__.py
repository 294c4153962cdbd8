"""
Motiva workout engine.

Turns generated weekly plans into trackable workout blocks.
"""
