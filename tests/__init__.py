"""Tests for Tiddlyroam."""
