"""Configuration for gitlane"""
