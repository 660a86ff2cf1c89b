"""ZEE Search Service.

Bilingual (English/Arabic) search over Quranic verses and Hadith records:
- Content gateways for the Quran and Hadith providers
- Lookup services assembling verse and hadith view models
- A search aggregator that merges both sources with per-source degradation
- A pagination builder for compact page links
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
