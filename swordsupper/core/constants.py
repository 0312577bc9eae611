LEVEL_BUCKET_RANKS = {
    "1-5": 1,
    "6-20": 2,
    "21-40": 3,
    "41-60": 4,
    "61-80": 5,
    "81-100": 6,
    "101-120": 7,
    "121-140": 8,
    "141-160": 9,
    "221-240": 10
}

LEVEL_BUCKETS = list(LEVEL_BUCKET_RANKS.keys())

BOSS_RUSH = "boss-rush"

DIFFICULTIES = [1, 2, 3, 4, 5, BOSS_RUSH]

INSTANCE_TYPES = ["normal", "boss"]

# Display labels derived from instance type / difficulty
TYPE_BOSS_RUSH = "Boss Rush"
TYPE_REGULAR_BOSS = "Regular Boss"
TYPE_NORMAL_INSTANCE = "Normal Instance"

BOSS_TYPES = [TYPE_NORMAL_INSTANCE, TYPE_REGULAR_BOSS, TYPE_BOSS_RUSH]

# Special map modifiers
MODIFIER_RUINED_PATH = "ruined-path"
MODIFIER_INCREASED = "increased"

MODIFIER_FIELDS = {
    MODIFIER_RUINED_PATH: "has_ruined_path",
    MODIFIER_INCREASED: "has_increased"
}

COMPLETION_COMPLETED = "completed"
COMPLETION_INCOMPLETE = "incomplete"

SORT_KEYS = ["level", "difficulty", "name", "type"]

ITEM_TYPES = ["weapon", "armor", "accessory", "consumable", "material"]

RARITY_RANKING = ["common", "uncommon", "rare", "epic", "legendary"]

# Filter value -> ItemRecord attribute
ITEM_PROPERTIES = {
    "crit": "crit",
    "dodge": "dodge",
    "fireResist": "fire_resist",
    "elecResist": "elec_resist"
}

ITEM_PROPERTY_LABELS = {
    "crit": "Crit",
    "dodge": "Dodge",
    "fireResist": "Fire Resist",
    "elecResist": "Electric Resist"
}

ABILITY_CATEGORIES = ["equipment", "temple"]

# Durable store keys, one independent blob each
STORE_KEY_BOSSES = "bosses"
STORE_KEY_COMPLETED = "completed_bosses"
STORE_KEY_ITEMS = "items"
STORE_KEY_LEVEL_GOLD = "level_gold"

STORE_KEYS = [STORE_KEY_BOSSES, STORE_KEY_COMPLETED, STORE_KEY_ITEMS, STORE_KEY_LEVEL_GOLD]

MESSAGE_TIMEOUT_SECONDS = 5

SEVERITIES = ["success", "info", "warning", "error"]

WIKI_SUBMITTER = "Wiki Data"
WEBSITE_SUBMITTER = "Website User"

# Seed data from the community wiki
DEFAULT_ITEMS = [
    {
        "id": 1,
        "name": "Amberfire Ring",
        "type": "accessory",
        "rarity": "rare",
        "description": "Grants the ability to throw a fire knife when attacking",
        "goldValue": 500,
        "crit": 5,
        "dodge": 0,
        "fireResist": 0,
        "elecResist": 0,
        "source": "Equipment drop or crafting",
        "submittedBy": WIKI_SUBMITTER
    },
    {
        "id": 2,
        "name": "Soulplate",
        "type": "armor",
        "rarity": "epic",
        "description": "Allows charging a shield by 20% of max HP when an enemy dies",
        "goldValue": 750,
        "crit": 0,
        "dodge": 10,
        "fireResist": 15,
        "elecResist": 15,
        "source": "Boss drop or blueprint crafting",
        "submittedBy": WIKI_SUBMITTER
    },
    {
        "id": 3,
        "name": "Ferocity Ring",
        "type": "accessory",
        "rarity": "uncommon",
        "description": "Adds rage each time you land a critical hit",
        "goldValue": 300,
        "crit": 8,
        "dodge": 0,
        "fireResist": 0,
        "elecResist": 0,
        "source": "Equipment drop",
        "submittedBy": WIKI_SUBMITTER
    },
    {
        "id": 4,
        "name": "Battlethirsty Vest",
        "type": "armor",
        "rarity": "rare",
        "description": "Crafted from Blueprint: Battlethirsty Vest, provides enhanced combat abilities",
        "goldValue": 600,
        "crit": 3,
        "dodge": 5,
        "fireResist": 10,
        "elecResist": 10,
        "source": "Blueprint crafting (requires 320 Ore, 140 Wood)",
        "submittedBy": WIKI_SUBMITTER
    }
]

DEFAULT_LEVEL_GOLD = [
    {"id": 1, "level": 22, "cost": 750, "submittedBy": WIKI_SUBMITTER}
]

ABILITIES = [
    # Rage
    {"name": "Add Rage On Heal", "description": "Add rage whenever you heal.", "category": "equipment"},
    {"name": "Add Rage On Crit", "description": "Adds a small amount of rage each time you land a critical hit", "category": "equipment"},
    {"name": "Add Rage On Hit 5", "description": "Adds rage every 5 hits", "category": "equipment"},
    {"name": "Add Rage on Enemy Death", "description": "Gains rage when an enemy dies - great for dealing with big fights", "category": "equipment"},
    # Shield
    {"name": "Gain Shield On Enemy Death", "description": "Gains shield when an enemy dies", "category": "equipment"},
    {"name": "Gain Shield On Hit 5", "description": "Gains shield every 5 hits", "category": "equipment"},
    {"name": "Gain Shield On Rage", "description": "Gains shield when using rage abilities", "category": "equipment"},
    {"name": "Gain Shield On Turn 4", "description": "Gains shield on turn 4 of combat", "category": "equipment"},
    # Healing
    {"name": "Heal On Target Death", "description": "Heals when a target dies", "category": "equipment"},
    {"name": "Heal Every Two Hits", "description": "Heals every two hits landed", "category": "equipment"},
    {"name": "Critical Recovery", "description": "Heal for 3% of Max HP whenever you land a critical hit.", "category": "equipment"},
    {"name": "Heal on Bolt", "description": "Heal a small amount whenever a lightning bolt fires.", "category": "equipment"},
    {"name": "Second Wind", "description": "Heal for 10% of Max HP at the start of each of your next 3 turns the first time you dip below 30% HP.", "category": "equipment"},
    # Lightning
    {"name": "Lightning Bolt", "description": "Zap your target with a lightning bolt at the start of your turn.", "category": "temple"},
    {"name": "Lightning On Attack", "description": "When you attack, zap your target with a lightning bolt.", "category": "equipment"},
    {"name": "Lightning On Crit", "description": "When you make a critical attack, zap your target with a lightning bolt.", "category": "equipment"},
    {"name": "Lightning on Target Death", "description": "Triggers lightning damage when a target dies", "category": "equipment"},
    # Magic Knife
    {"name": "Magic Knife", "description": "Throw a magic knife at the start of your turn.", "category": "temple"},
    {"name": "Magic Knife on Crit", "description": "Throw a magic knife whenever you make a critical attack.", "category": "equipment"},
    {"name": "Magic Knife On Rage", "description": "On Rage activation, throw a magic knife.", "category": "equipment"},
    {"name": "Magic Knife On Hit 3", "description": "Throws magic knife every 3 hits", "category": "equipment"},
    {"name": "Fire Knife On Attack", "description": "Throws a fire knife when attacking", "category": "equipment"},
    # Combat
    {"name": "Boost Attack On High HP", "description": "Boosts attack when HP is 100%.", "category": "equipment"},
    {"name": "Strike Twice Every Other", "description": "Every other turn, attack twice with your main weapon.", "category": "equipment"},
    {"name": "Dodge if Low", "description": "Increases dodge chance by 20% when HP is below 30%.", "category": "equipment"},
    # Temple Blessings
    {"name": "Blessing of Strength", "description": "Increases attack power for the duration of the mission", "category": "temple"},
    {"name": "Blessing of Protection", "description": "Increases defense and reduces incoming damage", "category": "temple"},
    {"name": "Blessing of Speed", "description": "Increases movement and attack speed", "category": "temple"},
    {"name": "Blessing of Fortune", "description": "Increases critical hit chance and loot drops", "category": "temple"}
]
