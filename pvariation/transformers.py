import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils import as_float_array

from .pvariation import pvar, _check_backend, _check_LSI

#=============================================================================================
# p-variation features
#=============================================================================================

class PVariationFeatures(BaseEstimator, TransformerMixin):
    """p-variations of every channel of a path, one column per (p, channel)"""

    def __init__(self, p_values=(1., 2.), backend='python', LSI=4):
        self.p_values = p_values
        self.backend = backend
        self.LSI = LSI

    def fit(self, X, y=None):
        _check_backend(self.backend)
        _check_LSI(self.LSI)
        return self

    def transform_instance(self, X):
        X = as_float_array(np.asarray(X))
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        return np.array([pvar(X[:, k], p, backend=self.backend, LSI=self.LSI)
                         for p in self.p_values for k in range(X.shape[1])])

    def transform(self, X, y=None):
        return np.array([self.transform_instance(x) for x in X])
