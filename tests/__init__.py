"""
Test suite for generic-arithmetic

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/unit/sample_types.py : Пользовательские числовые типы для тестов
"""
