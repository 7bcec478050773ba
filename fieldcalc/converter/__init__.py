"""
Field converter — tape (decimal feet <-> ft/in/fraction), slope, yards -> tons.

Precision matters here: this is for building, not ordering.
"""
