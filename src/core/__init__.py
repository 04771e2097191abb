"""Core domain package for renewbot.

Core contains the reset and reminder workflows plus message building without
any Notion or HTTP-specific code, keeping the business logic portable.
"""
