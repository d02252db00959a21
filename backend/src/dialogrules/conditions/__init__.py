"""Conditional-rule language for dialog elements.

This module provides:
- tokenize: Splits a condition expression into tokens
- parse_atomic / parse_expression: Build an expression tree from tokens
- validate / validate_line: Strict checks of rule documents
- compile_rules: Turns a validated document into a RuleSet

Usage:
    from dialogrules.conditions import compile_rules, validate

    document = "enable if checkbox1 == checked & counter1 >= 2;"
    error = validate(document, ["checkbox1", "counter1"])
    if not error:
        rules = compile_rules(document).to_dict()
"""

from dialogrules.conditions.compiler import RuleSet, compile_rules
from dialogrules.conditions.info import ConditionsInfo
from dialogrules.conditions.parser import (
    AtomicCondition,
    ConditionParseError,
    ConditionSequence,
    Connective,
    DiagnosticSink,
    ExpressionNode,
    IncompleteConditionError,
    iter_atoms,
    parse_atomic,
    parse_condition,
    parse_expression,
    referenced_elements,
    to_json,
)
from dialogrules.conditions.tokenizer import TokenKind, classify_token, tokenize
from dialogrules.conditions.validator import (
    DocumentValidation,
    validate,
    validate_document,
    validate_line,
)
from dialogrules.conditions.vocabulary import (
    ALLOWED_ACTIONS,
    ALLOWED_OPERATORS,
    ALLOWED_PROPERTIES,
    possible_numeric,
)

__all__ = [
    # Vocabulary
    "ALLOWED_ACTIONS",
    "ALLOWED_OPERATORS",
    "ALLOWED_PROPERTIES",
    "possible_numeric",
    # Tokenizer
    "TokenKind",
    "classify_token",
    "tokenize",
    # Parser
    "AtomicCondition",
    "ConditionParseError",
    "ConditionSequence",
    "Connective",
    "DiagnosticSink",
    "ExpressionNode",
    "IncompleteConditionError",
    "iter_atoms",
    "parse_atomic",
    "parse_condition",
    "parse_expression",
    "referenced_elements",
    "to_json",
    # Validator
    "DocumentValidation",
    "validate",
    "validate_document",
    "validate_line",
    # Compiler
    "RuleSet",
    "compile_rules",
    "ConditionsInfo",
]
