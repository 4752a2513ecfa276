# Catalog written on first run when no categories/products record exists yet.

STARTER_CATEGORIES = [
    {"id": "cat-drinks", "name": "Boissons", "icon": "cup-soda"},
    {"id": "cat-grocery", "name": "Épicerie", "icon": "shopping-basket"},
    {"id": "cat-hygiene", "name": "Hygiène", "icon": "sparkles"},
]

STARTER_PRODUCTS = [
    {
        "id": "prod-cola",
        "name": "Cola 33cl",
        "categoryId": "cat-drinks",
        "stock": 48,
        "salePrice": 75,
        "purchasePrice": 50,
        "totalSales": 0,
    },
    {
        "id": "prod-water",
        "name": "Eau minérale 1.5L",
        "categoryId": "cat-drinks",
        "stock": 30,
        "salePrice": 60,
        "purchasePrice": 35,
        "totalSales": 0,
    },
    {
        "id": "prod-rice",
        "name": "Riz 5kg",
        "categoryId": "cat-grocery",
        "stock": 12,
        "salePrice": 1250,
        "purchasePrice": 950,
        "totalSales": 0,
    },
    {
        "id": "prod-oil",
        "name": "Huile 1L",
        "categoryId": "cat-grocery",
        "stock": 8,
        "salePrice": 400,
        "purchasePrice": 310,
        "totalSales": 0,
    },
    {
        "id": "prod-soap",
        "name": "Savon",
        "categoryId": "cat-hygiene",
        "stock": 60,
        "salePrice": 50,
        "purchasePrice": 30,
        "totalSales": 0,
    },
]
