"""
Configuration for the risk calculator.

Built-in defaults live in ``defaults``; ``loader`` layers the optional
``instruments.yaml`` file and caller overrides on top of them.
"""
