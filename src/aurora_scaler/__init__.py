"""
Scheduled capacity scaling for Aurora Serverless v2 clusters.

Clusters opt in through resource tags:
- prewarm=yes: raised to the pre-warm ACU range before peak hours
- cooldown=yes: lowered to the cool-down ACU range afterwards
"""

__version__ = "0.1.0"
