from .pvariation import PVar, pvar, p_var_points, BACKENDS
from .reference import p_var, p_var_ref, p_var_brute_force, p_var_points_check
from .transformers import PVariationFeatures
