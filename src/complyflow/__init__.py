"""ComplyFlow backend - compliance platform for UK care-home operators.

ComplyFlow helps care providers stay inspection-ready for the Care Quality
Commission (CQC) and keep their Home Office sponsor licence safe.

Key Features:
- AI regulatory assistant proxied to a generative-AI provider
- Retrieval over a shared regulations knowledge base and per-organization documents
- Stripe subscription checkout, billing portal and webhook handling
- Transactional, onboarding and digest emails via Resend
- Scheduled jobs for trial expiry, visa expiry alerts and regulatory news
- Local CQC trend watchdog

Version: 1.0.0
"""

__version__ = "1.0.0"
