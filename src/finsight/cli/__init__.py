"""Command line interface for finsight."""
