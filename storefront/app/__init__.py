# Storefront cart service
