"""Semantic analysis of JavaScript syntax trees: nodes, scopes, types and errors."""