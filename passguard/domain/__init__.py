"""
Password Domain

Character classification, password rules, named policies and generation.
"""
