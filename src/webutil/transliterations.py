"""Transliteration table used to flatten names into ASCII slugs.

Covers common Western and Central European accented letters and most of the
Cyrillic block. Values may be empty (hard and soft signs, combining marks)
or longer than one character.
"""

TRANSLITERATIONS = {
    # Latin-1 supplement and Latin extended
    "\u00c0": "A",  # À
    "\u00c1": "A",  # Á
    "\u00c2": "A",  # Â
    "\u00c3": "A",  # Ã
    "\u00c4": "A",  # Ä
    "\u00c5": "AA",  # Å
    "\u00c6": "AE",  # Æ
    "\u00c7": "C",  # Ç
    "\u00c8": "E",  # È
    "\u00c9": "E",  # É
    "\u00ca": "E",  # Ê
    "\u00cb": "E",  # Ë
    "\u00cc": "I",  # Ì
    "\u00cd": "I",  # Í
    "\u00ce": "I",  # Î
    "\u00cf": "I",  # Ï
    "\u00d0": "D",  # Ð
    "\u0141": "L",  # Ł
    "\u00d1": "N",  # Ñ
    "\u00d2": "O",  # Ò
    "\u00d3": "O",  # Ó
    "\u00d4": "O",  # Ô
    "\u00d5": "O",  # Õ
    "\u00d6": "O",  # Ö
    "\u00d8": "OE",  # Ø
    "\u00d9": "U",  # Ù
    "\u00da": "U",  # Ú
    "\u00dc": "U",  # Ü
    "\u00db": "U",  # Û
    "\u00dd": "Y",  # Ý
    "\u00de": "Th",  # Þ
    "\u00df": "ss",  # ß
    "\u00e0": "a",  # à
    "\u00e1": "a",  # á
    "\u00e2": "a",  # â
    "\u00e3": "a",  # ã
    "\u00e4": "a",  # ä
    "\u00e5": "aa",  # å
    "\u00e6": "ae",  # æ
    "\u00e7": "c",  # ç
    "\u00e8": "e",  # è
    "\u00e9": "e",  # é
    "\u00ea": "e",  # ê
    "\u00eb": "e",  # ë
    "\u00ec": "i",  # ì
    "\u00ed": "i",  # í
    "\u00ee": "i",  # î
    "\u00ef": "i",  # ï
    "\u00f0": "d",  # ð
    "\u0142": "l",  # ł
    "\u00f1": "n",  # ñ
    "\u0144": "n",  # ń
    "\u00f2": "o",  # ò
    "\u00f3": "o",  # ó
    "\u00f4": "o",  # ô
    "\u00f5": "o",  # õ
    "\u014d": "o",  # ō
    "\u00f6": "o",  # ö
    "\u00f8": "oe",  # ø
    "\u015b": "s",  # ś
    "\u00f9": "u",  # ù
    "\u00fa": "u",  # ú
    "\u00fb": "u",  # û
    "\u016b": "u",  # ū
    "\u00fc": "u",  # ü
    "\u00fd": "y",  # ý
    "\u00fe": "th",  # þ
    "\u00ff": "y",  # ÿ
    "\u017c": "z",  # ż
    "\u0152": "OE",  # Œ
    "\u0153": "oe",  # œ
    # Cyrillic
    "\u0400": "Ie",
    "\u0401": "Io",
    "\u0402": "Dj",
    "\u0403": "Gj",
    "\u0404": "Ie",
    "\u0405": "Dz",
    "\u0406": "I",
    "\u0407": "Yi",
    "\u0408": "J",
    "\u0409": "Lj",
    "\u040a": "Nj",
    "\u040b": "Tsh",
    "\u040c": "Kj",
    "\u040d": "I",
    "\u040e": "U",
    "\u040f": "Dzh",
    "\u0410": "A",
    "\u0411": "B",
    "\u0412": "V",
    "\u0413": "G",
    "\u0414": "D",
    "\u0415": "E",
    "\u0416": "Zh",
    "\u0417": "Z",
    "\u0418": "I",
    "\u0419": "I",
    "\u041a": "K",
    "\u041b": "L",
    "\u041c": "M",
    "\u041d": "N",
    "\u041e": "O",
    "\u041f": "P",
    "\u0420": "R",
    "\u0421": "S",
    "\u0422": "T",
    "\u0423": "U",
    "\u0424": "F",
    "\u0425": "Kh",
    "\u0426": "Ts",
    "\u0427": "Ch",
    "\u0428": "Sh",
    "\u0429": "Shch",
    "\u042a": "",
    "\u042b": "Y",
    "\u042c": "",
    "\u042d": "E",
    "\u042e": "Iu",
    "\u042f": "Ia",
    "\u0430": "a",
    "\u0431": "b",
    "\u0432": "v",
    "\u0433": "g",
    "\u0434": "d",
    "\u0435": "e",
    "\u0436": "zh",
    "\u0437": "z",
    "\u0438": "i",
    "\u0439": "i",
    "\u043a": "k",
    "\u043b": "l",
    "\u043c": "m",
    "\u043d": "n",
    "\u043e": "o",
    "\u043f": "p",
    "\u0440": "r",
    "\u0441": "s",
    "\u0442": "t",
    "\u0443": "u",
    "\u0444": "f",
    "\u0445": "kh",
    "\u0446": "ts",
    "\u0447": "ch",
    "\u0448": "sh",
    "\u0449": "shch",
    "\u044a": "",
    "\u044b": "y",
    "\u044c": "",
    "\u044d": "e",
    "\u044e": "iu",
    "\u044f": "ia",
    "\u0450": "ie",
    "\u0451": "io",
    "\u0452": "dj",
    "\u0453": "gj",
    "\u0454": "ie",
    "\u0455": "dz",
    "\u0456": "i",
    "\u0457": "yi",
    "\u0458": "j",
    "\u0459": "lj",
    "\u045a": "nj",
    "\u045b": "tsh",
    "\u045c": "kj",
    "\u045d": "i",
    "\u045e": "u",
    "\u045f": "dzh",
    "\u0460": "O",
    "\u0461": "o",
    "\u0462": "E",
    "\u0463": "e",
    "\u0464": "Ie",
    "\u0465": "ie",
    "\u0466": "E",
    "\u0467": "e",
    "\u0468": "Ie",
    "\u0469": "ie",
    "\u046a": "O",
    "\u046b": "o",
    "\u046c": "Io",
    "\u046d": "io",
    "\u046e": "Ks",
    "\u046f": "ks",
    "\u0470": "Ps",
    "\u0471": "ps",
    "\u0472": "F",
    "\u0473": "f",
    "\u0474": "Y",
    "\u0475": "y",
    "\u0476": "Y",
    "\u0477": "y",
    "\u0478": "u",
    "\u0479": "u",
    "\u047a": "O",
    "\u047b": "o",
    "\u047c": "O",
    "\u047d": "o",
    "\u047e": "Ot",
    "\u047f": "ot",
    "\u0480": "Q",
    "\u0481": "q",
    "\u0482": "1000",
    "\u0483": "",
    "\u0484": "",
    "\u0485": "",
    "\u0486": "",
    "\u0487": "",
    "\u0488": "100000",
    "\u0489": "1000000",
    "\u048a": "",
    "\u048b": "",
    "\u048c": "",
    "\u048d": "",
    "\u04ae": "U",
    "\u04af": "u",
    "\u04b4": "Tts",
    "\u04b5": "tts",
    "\u04ba": "H",
    "\u04bb": "h",
    "\u04bc": "Ch",
    "\u04bd": "ch",
    "\u04c1": "Zh",
    "\u04c2": "zh",
    "\u04cb": "Ch",
    "\u04cc": "ch",
    "\u04d0": "a",
    "\u04d1": "a",
    "\u04d2": "A",
    "\u04d3": "a",
    "\u04d4": "Ae",
    "\u04d5": "ae",
    "\u04d6": "Ie",
    "\u04d7": "ie",
    "\u04dc": "Zh",
    "\u04dd": "zh",
    "\u04de": "Z",
    "\u04df": "z",
    "\u04e0": "Dz",
    "\u04e1": "dz",
    "\u04e2": "I",
    "\u04e3": "i",
    "\u04e4": "I",
    "\u04e5": "i",
    "\u04e6": "O",
    "\u04e7": "o",
    "\u04e8": "O",
    "\u04e9": "o",
    "\u04ea": "O",
    "\u04eb": "o",
    "\u04ec": "E",
    "\u04ed": "e",
    "\u04ee": "U",
    "\u04ef": "u",
    "\u04f0": "U",
    "\u04f1": "u",
    "\u04f2": "U",
    "\u04f3": "u",
    "\u04f4": "Ch",
    "\u04f5": "ch",
    "\u04f8": "Y",
    "\u04f9": "y",
}
