# Puts the top-level openjdk_* modules on the path when running the tests
# under test/ from a source checkout.
