"""Static reference data for the DRC marketplace."""

CATEGORIES = [
    'Légumes',
    'Fruits',
    'Céréales',
    'Légumineuses',
    'Tubercules',
    'Épices',
    'Produits laitiers',
    'Viandes',
    'Poissons',
    'Autres'
]

# The 26 provinces of the DRC
PROVINCES = [
    'Kinshasa',
    'Haut-Katanga',
    'Haut-Lomami',
    'Lualaba',
    'Tanganyika',
    'Kasaï-Oriental',
    'Kasaï',
    'Kasaï-Central',
    'Lomami',
    'Sankuru',
    'Maniema',
    'Sud-Kivu',
    'Nord-Kivu',
    'Ituri',
    'Haut-Uele',
    'Bas-Uele',
    'Tshopo',
    'Mongala',
    'Sud-Ubangi',
    'Nord-Ubangi',
    'Équateur',
    'Tshuapa',
    'Mai-Ndombe',
    'Kwilu',
    'Kwango',
    'Kongo-Central'
]

# Contact requests only move forward through these
CONTACT_STATUSES = ('pending', 'contacted', 'completed')
