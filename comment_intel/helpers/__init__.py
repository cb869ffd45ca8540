"""Common helper utilities shared by the pipeline stages.

Side-effect free apart from the sleeps performed between retry attempts.
"""
