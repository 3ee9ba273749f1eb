# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Constants shared across the project."""

XML_SCHEMA_NS = "http://www.w3.org/2001/XMLSchema"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# Prefix always bound to XML_SCHEMA_NS, cannot be overridden by user bindings
XSD_PREFIX = "xs"

# Key of the root context holding the top-level schema constructs
ELEMENTS_KEY = "elements"

# Fixed keys introduced by structural constructs
PROPERTIES_KEY = "properties"
COMMENT_KEY = "comment"
BASE_KEY = "base"
ENUMERATION_KEY = "enumeration"

# Policies
ON_DUPLICATE_ERROR = "error"
ON_DUPLICATE_LAST_WINS = "last_wins"
ON_DUPLICATE_POLICIES = (ON_DUPLICATE_ERROR, ON_DUPLICATE_LAST_WINS)

ON_MISSING_ERROR = "error"
ON_MISSING_SKIP = "skip"
ON_MISSING_POLICIES = (ON_MISSING_ERROR, ON_MISSING_SKIP)
