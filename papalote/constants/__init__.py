# ==============================================================================
# CONSTANTES DEL MARKETPLACE
# ==============================================================================
# catalog.py      → categorías, subcategorías y estados
# coupons.py      → cupones, costos de envío y envoltura
# achievements.py → definiciones de logros de compradores y vendedores
# ==============================================================================
