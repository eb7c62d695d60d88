"""
DevPalette Colors Module

Provides hex/RGB/HSL conversions, channel-average color combination
with an editable history, and search filtering over saved colors.
"""
