"""styledpass model layer -- public type re-exports."""

from styledpass.model.ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    Position,
    RawExpression,
    SourceLocation,
    StringLiteral,
    TemplateElement,
    TemplateLiteral,
)
from styledpass.model.component import (
    ComponentDescriptor,
    ComponentReference,
    FunctionalComponent,
    IntrinsicTag,
)
from styledpass.model.diagnostic import Diagnostic, Severity
from styledpass.model.interpolation import Interpolation, VariableContext
from styledpass.model.params import (
    CallParam,
    CalleeParam,
    ConstValue,
    ExpressionValue,
    FunctionValue,
    LazyValue,
    MemberParam,
    Param,
    Params,
    TemplateParam,
    ValueType,
)
from styledpass.model.rule import CssRule, EvalMeta, Rules, ValueCache, get_eval_meta
from styledpass.model.values import UNDEFINED, EvaluatedError

__all__ = [
    # ast
    "Node",
    "Position",
    "SourceLocation",
    "Identifier",
    "StringLiteral",
    "NumericLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "RawExpression",
    "MemberExpression",
    "CallExpression",
    "BlockStatement",
    "ArrowFunctionExpression",
    "ObjectProperty",
    "ObjectExpression",
    "ArrayExpression",
    "TemplateElement",
    "TemplateLiteral",
    # component
    "ComponentDescriptor",
    "IntrinsicTag",
    "FunctionalComponent",
    "ComponentReference",
    # diagnostic
    "Severity",
    "Diagnostic",
    # interpolation
    "Interpolation",
    "VariableContext",
    # params
    "ValueType",
    "FunctionValue",
    "ConstValue",
    "LazyValue",
    "ExpressionValue",
    "CalleeParam",
    "MemberParam",
    "CallParam",
    "TemplateParam",
    "Param",
    "Params",
    # rule
    "CssRule",
    "Rules",
    "ValueCache",
    "EvalMeta",
    "get_eval_meta",
    # values
    "UNDEFINED",
    "EvaluatedError",
]
