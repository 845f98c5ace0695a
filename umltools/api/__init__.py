"""HTTP API for UML import, code generation and jobs."""
