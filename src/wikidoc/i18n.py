"""Locale word lists shared by the parsers.

Each list mixes the English form with the localized variants seen on the
larger Wikipedias. Entries are lowercase; callers match case-insensitively.
"""

from __future__ import annotations

from typing import Final

# Magic word following '#' on a redirect page
REDIRECTS: Final[tuple[str, ...]] = (
    "redirect",
    "weiterleitung",
    "redirection",
    "redirección",
    "redirecionamento",
    "rinvio",
    "doorverwijzing",
    "omdirigering",
    "przekieruj",
    "перенаправление",
    "перенаправлення",
    "yönlendir",
    "yönlendirme",
    "転送",
    "リダイレクト",
    "重定向",
    "넘겨주기",
    "تحويل",
    "הפניה",
    "ohjaus",
    "uudelleenohjaus",
)

# Template names that mark a disambiguation page
DISAMBIGUATIONS: Final[tuple[str, ...]] = (
    "disambiguation",
    "disambig",
    "disamb",
    "dab",
    "dp",
    "hndis",
    "geodis",
    "numberdis",
    "set index article",
    "surname",
    "given name",
    "hospital disambiguation",
    "school disambiguation",
    "letter-number combination disambiguation",
    "mil-unit-dis",
    "begriffsklärung",
    "homonymie",
    "desambiguación",
    "desambiguação",
    "disambigua",
    "doorverwijspagina",
    "ujednoznacznienie",
    "неоднозначность",
    "многозначность",
    "täsmennyssivu",
    "förgreningssida",
    "pekerdab",
    "aimai",
    "消歧义",
)

# Prefixes that introduce an infobox template name
INFOBOXES: Final[tuple[str, ...]] = (
    "infobox",
    "ficha",
    "ficha de",
    "infoboks",
    "infokast",
    "infoboîte",
    "bilgi kutusu",
    "inligtingskas",
    "tietolaatikko",
    "faktaruta",
    "карточка",
    "картка",
    "سلسلة",
    "معلومات",
    "基礎情報",
    "信息框",
    "정보상자",
)

# Namespaces that hold categories
CATEGORIES: Final[tuple[str, ...]] = (
    "category",
    "catégorie",
    "kategorie",
    "categoría",
    "categoria",
    "categorie",
    "kategoria",
    "kategori",
    "luokka",
    "категория",
    "категорія",
    "カテゴリ",
    "分类",
    "분류",
    "تصنيف",
)

# Namespaces that hold media files
FILES: Final[tuple[str, ...]] = (
    "file",
    "image",
    "media",
    "fichier",
    "datei",
    "bild",
    "archivo",
    "imagen",
    "immagine",
    "ficheiro",
    "imagem",
    "plik",
    "grafika",
    "bestand",
    "tiedosto",
    "fil",
    "файл",
    "изображение",
    "ファイル",
    "画像",
    "文件",
    "파일",
    "ملف",
)

# Section titles that only hold the rendered reference list
REFERENCE_SECTIONS: Final[tuple[str, ...]] = (
    "references",
    "reference",
    "einzelnachweise",
    "referencias",
    "références",
    "notes et références",
    "referenze",
    "referências",
    "referenties",
    "referenser",
    "bronnen",
    "przypisy",
    "примечания",
    "виноски",
    "脚注",
    "参考文献",
    "각주",
)

# Abbreviations that end in a period without ending the sentence
ABBREVIATIONS: Final[tuple[str, ...]] = (
    "ad", "adj", "adm", "adv", "al", "alta", "approx", "apr", "apt", "arc",
    "ariz", "assn", "asst", "atty", "aug", "ave", "ba", "bc", "bl", "bldg",
    "blvd", "brig", "bros", "ca", "cal", "calif", "capt", "cca", "cg", "cl",
    "cm", "cmdr", "co", "col", "colo", "comdr", "conn", "corp", "cpl", "cres",
    "ct", "cyn", "dak", "dec", "def", "dept", "det", "dg", "dist", "dl", "dm",
    "dr", "ea", "eg", "eng", "esp", "esq", "est", "etc", "ex", "exp", "feb",
    "fem", "fig", "fl oz", "fl", "fla", "fm", "fr", "ft", "fy", "ga", "gal",
    "gb", "gen", "gov", "hg", "hon", "hr", "hrs", "hwy", "hz", "ia", "ida",
    "ie", "inc", "inf", "jan", "jd", "jr", "jul", "jun", "kan", "kans", "kb",
    "kg", "km", "kmph", "lat", "lb", "lit", "llb", "lm", "lng", "lt", "ltd",
    "lx", "ma", "maj", "mar", "masc", "mb", "md", "messrs", "mg", "mi", "min",
    "minn", "misc", "mister", "ml", "mlle", "mm", "mme", "mph", "mps", "mr",
    "mrs", "ms", "mstr", "mt", "neb", "nebr", "nee", "no", "nov", "oct",
    "okla", "ont", "op", "ord", "oz", "pa", "pd", "penn", "ph", "pg", "phd",
    "pl", "pp", "pref", "prob", "prof", "pron", "ps", "psa", "pseud", "pt",
    "pvt", "qt", "que", "rb", "rd", "rep", "reps", "res", "rev", "sask",
    "sec", "sen", "sens", "sep", "sept", "sfc", "sgt", "sir", "situ", "sq",
    "sr", "ss", "st", "supt", "surg", "tb", "tbl", "tbsp", "tce", "td", "tel",
    "temp", "tenn", "tex", "tsp", "univ", "usafa", "ut", "va", "vb", "ver",
    "vet", "vitro", "vivo", "vol", "vs", "vt", "wis", "wisc", "wr", "wy",
    "wyo", "yb", "µg",
    # German, French, Spanish, Italian, Portuguese
    "bzw", "ca", "ggf", "hl", "nr", "str", "usw", "vgl", "z.b", "mme", "mlle",
    "av", "dña", "sra", "srta", "sres", "ecc", "sig", "dott", "sto", "sta",
)

# Interwiki prefixes allowed to produce an interwiki link
INTERWIKIS: Final[frozenset[str]] = frozenset(
    [
        # sister projects
        "w", "wikipedia", "wikt", "wiktionary", "q", "wikiquote", "s",
        "wikisource", "n", "wikinews", "b", "wikibooks", "v", "wikiversity",
        "voy", "wikivoyage", "species", "wikispecies", "commons", "c", "m",
        "meta", "mw", "mediawikiwiki", "d", "wikidata", "phab", "foundation",
        "wmf", "outreach", "incubator",
        # language editions
        "en", "de", "fr", "es", "it", "pt", "nl", "pl", "ru", "uk", "sv", "no",
        "nn", "da", "fi", "is", "et", "lv", "lt", "cs", "sk", "sl", "hr", "sr",
        "sh", "bs", "bg", "mk", "ro", "hu", "el", "tr", "ar", "fa", "he", "ur",
        "hi", "bn", "ta", "te", "ml", "mr", "th", "vi", "id", "ms", "tl", "zh",
        "ja", "ko", "ka", "hy", "az", "kk", "uz", "be", "sq", "eu", "ca", "gl",
        "cy", "ga", "gd", "br", "la", "eo", "af", "sw", "simple", "war", "ceb",
        "min", "nds", "lb", "oc", "an", "ast", "scn", "vec",
    ]
)
