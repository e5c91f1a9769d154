"""One-class-per-file implementations behind ``genai_failover.base.models``."""
