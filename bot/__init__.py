"""
Console process: configuration, lifecycle and the Discord transport.
"""
