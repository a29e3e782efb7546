"""AI learning map generator: radial graph and card views over a generated topic tree"""
