"""
Services - registry workflows and external collaborators
"""
