from core.correction.corrector import PhoneticCorrector, generate_variants, phonetic_normalize
from core.correction.edit_distance import edit_distance

__all__: list[str] = ["PhoneticCorrector", "edit_distance", "generate_variants", "phonetic_normalize"]
