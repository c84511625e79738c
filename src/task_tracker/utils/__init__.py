"""Utility helpers for the task tracker."""
