"""MannMitra services.

- safety_service: PII redaction, toxicity/self-harm scoring, moderation
- community_service: pseudonymous peer-support posts
- journal_service: private journal entries (redacted, never moderated)
- chat_service: crisis banner and redaction around the reply provider
"""
