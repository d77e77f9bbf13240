"""Linear outcome regression learner."""

from typing import Any, Dict
import numpy as np
from sklearn.linear_model import LinearRegression

from .base_learner import BaseLearner


class LinearOutcomeLearner(BaseLearner):
    """
    Ordinary least squares implementation of BaseLearner.

    Parameters
    ----------
    params : Dict[str, Any], optional
        Keyword arguments for ``sklearn.linear_model.LinearRegression``.
    """

    def __init__(self, params: Dict[str, Any] = None):
        self.params = params or self._default_params()
        self.model = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> 'LinearOutcomeLearner':
        """
        Fit OLS to training data.

        Parameters
        ----------
        X : np.ndarray
            Feature matrix of shape (n_samples, n_features).
        y : np.ndarray
            Target vector of shape (n_samples,).

        Returns
        -------
        self : LinearOutcomeLearner
            Fitted model instance.
        """
        self.model = LinearRegression(**self.params)
        self.model.fit(_as_matrix(X), y)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Make predictions on new data.

        Parameters
        ----------
        X : np.ndarray
            Feature matrix of shape (n_samples, n_features).

        Returns
        -------
        np.ndarray
            Predictions of shape (n_samples,).
        """
        if self.model is None:
            raise ValueError("Model has not been fitted yet. Call fit() first.")

        return self.model.predict(_as_matrix(X))

    @staticmethod
    def _default_params() -> Dict[str, Any]:
        return {'fit_intercept': True}


def _as_matrix(X: np.ndarray) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    return X
