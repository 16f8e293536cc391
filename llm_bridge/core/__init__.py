"""
Provider-independent building blocks: context store, message builder,
response-format negotiation, attachments, executor, extraction, transport.
"""
