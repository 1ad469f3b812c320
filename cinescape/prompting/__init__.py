"""Prompting package.

This package contains deterministic prompt-construction helpers used by the
image service layer. It does not perform validation or model invocation.
"""
