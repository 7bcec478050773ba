"""
Shape volume engine.

Pure Python math. Given one shape's raw field values (strings from the form,
numbers, or missing), produce cubic yards with the waste allowance applied.
"""
