"""Implementation modules behind ``genai_failover.base.cancellation``."""
