"""Handler dispatch core: registry, handler contract and dispatching service.

A closed enum of discriminants (payment method, notification channel) maps
to stateless handlers. The dispatching service resolves a handler, validates
the request, executes it and reports the outcome to an optional audit trail.
"""
