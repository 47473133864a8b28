"""
Server entry points
"""
