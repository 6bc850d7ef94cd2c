"""
Bitrise step running calabash-cucumber UI tests on an iOS Simulator
"""

__version__ = "1.0.0"
