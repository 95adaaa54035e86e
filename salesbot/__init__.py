"""Multi-tenant sales assistant conversation engine."""
