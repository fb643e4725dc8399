"""Tree-sitter definition queries, one per language.

Capture conventions:
- ``@definition.<kind>``      -- the node spanning the whole definition block
- ``@name.definition.<kind>`` -- the identifier node; its parent is taken as
  the enclosing declaration
- ``@_<helper>``              -- predicate helpers, ignored downstream

Bump CATALOG_VERSION whenever a query changes shape so cached outlines built
from older queries can be told apart.
"""

from __future__ import annotations

CATALOG_VERSION = 1

# =========================================================================
# Python
# =========================================================================

PYTHON_QUERY = """
(class_definition
    name: (identifier) @name.definition.class) @definition.class

(function_definition
    name: (identifier) @name.definition.function) @definition.function
"""

# =========================================================================
# JavaScript / TypeScript / TSX
# =========================================================================

# Shared by every ECMAScript dialect. Exported declarations match both the
# export wrapper and the inner declaration; the synthesizer dedupes them.
_ECMASCRIPT_COMMON = """
(function_declaration
    name: (identifier) @name.definition.function) @definition.function

(generator_function_declaration
    name: (identifier) @name.definition.function) @definition.function

(method_definition
    name: (property_identifier) @name.definition.method) @definition.method

(lexical_declaration
    (variable_declarator
        name: (identifier) @name.definition.function
        value: [(arrow_function) (function_expression)])) @definition.function

(export_statement
    declaration: (function_declaration
        name: (identifier) @name.definition.function)) @definition.function
"""

_JSX = """
(jsx_element) @definition.jsx_element
"""

JAVASCRIPT_QUERY = (
    _ECMASCRIPT_COMMON
    + """
(class_declaration
    name: (identifier) @name.definition.class) @definition.class

(export_statement
    declaration: (class_declaration
        name: (identifier) @name.definition.class)) @definition.class
"""
    + _JSX
)

TYPESCRIPT_QUERY = (
    _ECMASCRIPT_COMMON
    + """
(class_declaration
    name: (type_identifier) @name.definition.class) @definition.class

(abstract_class_declaration
    name: (type_identifier) @name.definition.class) @definition.class

(export_statement
    declaration: (class_declaration
        name: (type_identifier) @name.definition.class)) @definition.class

(interface_declaration
    name: (type_identifier) @name.definition.interface) @definition.interface

(type_alias_declaration
    name: (type_identifier) @name.definition.type) @definition.type

(enum_declaration
    name: (identifier) @name.definition.enum) @definition.enum
"""
)

TSX_QUERY = TYPESCRIPT_QUERY + _JSX

# =========================================================================
# Go
# =========================================================================

GO_QUERY = """
(function_declaration
    name: (identifier) @name.definition.function) @definition.function

(method_declaration
    name: (field_identifier) @name.definition.method) @definition.method

(type_declaration
    (type_spec
        name: (type_identifier) @name.definition.type)) @definition.type
"""

# =========================================================================
# Rust
# =========================================================================

RUST_QUERY = """
(function_item
    name: (identifier) @name.definition.function) @definition.function

(struct_item
    name: (type_identifier) @name.definition.struct) @definition.struct

(enum_item
    name: (type_identifier) @name.definition.enum) @definition.enum

(trait_item
    name: (type_identifier) @name.definition.trait) @definition.trait

(impl_item
    type: (_) @name.definition.impl) @definition.impl

(mod_item
    name: (identifier) @name.definition.module) @definition.module

(macro_definition
    name: (identifier) @name.definition.macro) @definition.macro
"""

# =========================================================================
# JVM
# =========================================================================

JAVA_QUERY = """
(class_declaration
    name: (identifier) @name.definition.class) @definition.class

(interface_declaration
    name: (identifier) @name.definition.interface) @definition.interface

(enum_declaration
    name: (identifier) @name.definition.enum) @definition.enum

(record_declaration
    name: (identifier) @name.definition.record) @definition.record

(annotation_type_declaration
    name: (identifier) @name.definition.annotation) @definition.annotation

(method_declaration
    name: (identifier) @name.definition.method) @definition.method

(constructor_declaration
    name: (identifier) @name.definition.constructor) @definition.constructor
"""

KOTLIN_QUERY = """
(class_declaration
    (identifier) @name.definition.class) @definition.class

(object_declaration
    (identifier) @name.definition.object) @definition.object

(function_declaration
    (identifier) @name.definition.function) @definition.function
"""

SCALA_QUERY = """
(class_definition
    name: (identifier) @name.definition.class) @definition.class

(object_definition
    name: (identifier) @name.definition.object) @definition.object

(trait_definition
    name: (identifier) @name.definition.trait) @definition.trait

(function_definition
    name: (identifier) @name.definition.function) @definition.function
"""

# =========================================================================
# C family
# =========================================================================

C_QUERY = """
(function_definition
    declarator: (function_declarator
        declarator: (identifier) @name.definition.function)) @definition.function

(struct_specifier
    name: (type_identifier) @name.definition.struct
    body: (field_declaration_list)) @definition.struct

(union_specifier
    name: (type_identifier) @name.definition.union
    body: (field_declaration_list)) @definition.union

(enum_specifier
    name: (type_identifier) @name.definition.enum
    body: (enumerator_list)) @definition.enum

(type_definition
    declarator: (type_identifier) @name.definition.type) @definition.type
"""

CPP_QUERY = """
(function_definition
    declarator: (function_declarator
        declarator: (identifier) @name.definition.function)) @definition.function

(function_definition
    declarator: (function_declarator
        declarator: (qualified_identifier) @name.definition.method)) @definition.method

(function_definition
    declarator: (function_declarator
        declarator: (field_identifier) @name.definition.method)) @definition.method

(class_specifier
    name: (type_identifier) @name.definition.class) @definition.class

(struct_specifier
    name: (type_identifier) @name.definition.struct
    body: (field_declaration_list)) @definition.struct

(enum_specifier
    name: (type_identifier) @name.definition.enum) @definition.enum

(namespace_definition
    name: (namespace_identifier) @name.definition.namespace) @definition.namespace
"""

C_SHARP_QUERY = """
(namespace_declaration
    name: (_) @name.definition.namespace) @definition.namespace

(class_declaration
    name: (identifier) @name.definition.class) @definition.class

(interface_declaration
    name: (identifier) @name.definition.interface) @definition.interface

(struct_declaration
    name: (identifier) @name.definition.struct) @definition.struct

(enum_declaration
    name: (identifier) @name.definition.enum) @definition.enum

(record_declaration
    name: (identifier) @name.definition.record) @definition.record

(method_declaration
    name: (identifier) @name.definition.method) @definition.method

(constructor_declaration
    name: (identifier) @name.definition.constructor) @definition.constructor

(property_declaration
    name: (identifier) @name.definition.property) @definition.property
"""

SWIFT_QUERY = """
(class_declaration
    name: (type_identifier) @name.definition.class) @definition.class

(protocol_declaration
    name: (type_identifier) @name.definition.protocol) @definition.protocol

(function_declaration
    name: (simple_identifier) @name.definition.function) @definition.function
"""

# =========================================================================
# Scripting
# =========================================================================

RUBY_QUERY = """
(class
    name: (_) @name.definition.class) @definition.class

(module
    name: (_) @name.definition.module) @definition.module

(method
    name: (_) @name.definition.method) @definition.method

(singleton_method
    name: (_) @name.definition.method) @definition.method
"""

PHP_QUERY = """
(function_definition
    name: (name) @name.definition.function) @definition.function

(class_declaration
    name: (name) @name.definition.class) @definition.class

(interface_declaration
    name: (name) @name.definition.interface) @definition.interface

(trait_declaration
    name: (name) @name.definition.trait) @definition.trait

(enum_declaration
    name: (name) @name.definition.enum) @definition.enum

(method_declaration
    name: (name) @name.definition.method) @definition.method
"""

LUA_QUERY = """
(function_declaration
    name: (_) @name.definition.function) @definition.function
"""

BASH_QUERY = """
(function_definition
    name: (word) @name.definition.function) @definition.function
"""

# =========================================================================
# Functional
# =========================================================================

OCAML_QUERY = """
(value_definition
    (let_binding
        (value_name) @name.definition.value)) @definition.value

(type_definition
    (type_binding
        (type_constructor) @name.definition.type)) @definition.type

(module_definition
    (module_binding
        (module_name) @name.definition.module)) @definition.module
"""

# =========================================================================
# Markup / styles / config
# =========================================================================

# Every element is a candidate; inline and content tags are dropped by the
# inline-markup predicate, so document structure (head, body, nav, ...)
# survives.
HTML_QUERY = """
(script_element) @definition.script

(style_element) @definition.style

(element) @definition.element
"""

CSS_QUERY = """
(rule_set
    (selectors) @name.definition.selector) @definition.rule

(media_statement) @definition.media

(keyframes_statement
    (keyframes_name) @name.definition.keyframes) @definition.keyframes
"""

TOML_QUERY = """
(table
    [(bare_key) (dotted_key) (quoted_key)] @name.definition.table) @definition.table

(table_array_element
    [(bare_key) (dotted_key) (quoted_key)] @name.definition.table) @definition.table
"""
