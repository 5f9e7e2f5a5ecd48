"""Cross-cutting pieces shared by every service: errors, ports, base class."""
