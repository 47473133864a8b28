"""
Services for GitHub Agent
"""
