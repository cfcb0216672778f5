"""hostinit: one-shot bootstrap for Debian-family hosts.

Core design goals:
- Idempotent steps that reconcile on-disk state
- Fail fast, no rollback (backups for hosts and sshd_config only)
- Same shell setup for root and the operator account
- Centralized logging
"""

__all__ = []
