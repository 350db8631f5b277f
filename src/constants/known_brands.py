KNOWN_BRANDS = (
    "New Balance", "Under Armour", "Topo Athletic", "La Sportiva", "Mount to Coast",
    "The North Face", "Li-Ning", "Li Ning", "Inov-8", "Inov8",
    "Nike", "Adidas", "Hoka", "Brooks", "Asics", "Saucony", "On", "Salomon",
    "Altra", "Mizuno", "Puma", "Reebok", "Skechers", "Karhu", "Craft", "Merrell",
    "Norda", "NNormal", "Kiprun", "Decathlon", "Scott", "Diadora", "Vibram",
    "Tracksmith", "Kailas", "361",
)

# Brands too short to match case-insensitively inside prose.
CASE_SENSITIVE_BRANDS = frozenset({"On", "361"})

BRAND_ALIASES = {
    "asics": "Asics",
    "hoka": "Hoka",
    "hoka one one": "Hoka",
    "puma": "Puma",
    "on running": "On",
    "on": "On",
    "nike": "Nike",
    "adidas": "Adidas",
    "new balance": "New Balance",
    "nb": "New Balance",
    "the north face": "The North Face",
    "under armour": "Under Armour",
    "inov8": "Inov-8",
    "inov-8": "Inov-8",
    "li ning": "Li-Ning",
    "li-ning": "Li-Ning",
    "topo": "Topo Athletic",
    "topo athletic": "Topo Athletic",
    "la sportiva": "La Sportiva",
    "nnormal": "NNormal",
}

# Sub-brand prefixes some manufacturers prepend to model names.
SUB_BRAND_PREFIXES = {
    "decathlon": ("kiprun",),
}

KNOWN_SERIES = frozenset({
    "pegasus", "ghost", "clifton", "speedgoat", "nimbus", "kayano", "cumulus",
    "structure", "vomero", "react", "infinity", "invincible", "turbo", "tempo",
    "zoom", "zoomx", "vaporfly", "alphafly", "streak", "rival", "air", "gel",
    "fresh", "foam", "fuelcell", "more", "beacon", "rebel", "hierro", "summit",
    "ultraboost", "supernova", "adizero", "adios", "boston", "takumi", "evo",
    "solarboost", "pureboost", "response", "duramo", "boost", "cloud",
    "cloudmonster", "cloudstratus", "cloudflow", "cloudswift", "cloudsurfer",
    "cloudflyer", "cloudrush", "cloudventure", "cloudeclipse", "endorphin",
    "kinvara", "ride", "guide", "hurricane", "triumph", "peregrine", "xodus",
    "bondi", "arahi", "rincon", "mach", "challenger", "tecton", "torrent",
    "kawana", "transport", "mafate", "skyward", "lone", "peak", "escalante",
    "rivera", "paradigm", "provision", "torin", "timp", "olympus", "superior",
    "experience", "sense", "speedcross", "ultra", "wave", "rider", "inspire",
    "sky", "neo", "hyperion", "adrenaline", "glycerin", "launch", "catamount",
    "caldera", "cascadia", "divide", "deviate", "velocity", "magnify",
    "nitro", "deviate", "liberate", "foreverrun", "forever", "novablast",
    "superblast", "megablast", "metaspeed", "magic", "sonicblast",
})

SERIES_PREFIXES = ("cloud", "gel-", "zoom")
