"""Ansible inventory rendering, playbook execution and a provider listing both."""

__version__ = "0.1.0"
__all__ = ["inventory", "playbook", "provider"]