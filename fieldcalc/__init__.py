"""
FieldCalc — jobsite quantity ordering and field measurement conversions.

Calculator = ordering (round up is good).
Converter  = building (precision is required).
"""
