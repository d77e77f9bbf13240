"""Abstract base class for outcome learners."""

from abc import ABC, abstractmethod
from typing import Tuple
import numpy as np


class BaseLearner(ABC):
    """
    Abstract base class for outcome regression models.

    Subclasses regress the observed outcome on treatment; the plug-in and
    augmented estimators read the fitted values and the predictions with
    every unit set to treated and to untreated.
    """

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> 'BaseLearner':
        """
        Fit the model to training data.

        Parameters
        ----------
        X : np.ndarray
            Regressors, shape (n_samples,) or (n_samples, n_features).
        y : np.ndarray
            Outcome vector of shape (n_samples,).

        Returns
        -------
        self : BaseLearner
            Fitted model instance.
        """
        pass

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        pass

    def fit_predict(self, X_train: np.ndarray, y_train: np.ndarray,
                    X_test: np.ndarray) -> np.ndarray:
        """Fit model and predict on ``X_test`` in one call."""
        self.fit(X_train, y_train)
        return self.predict(X_test)

    def predict_arms(
        self,
        treatment: np.ndarray,
        outcome: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Fit ``outcome ~ treatment`` and predict under each arm.

        Parameters
        ----------
        treatment : np.ndarray
            Binary treatment vector.
        outcome : np.ndarray
            Observed outcomes.

        Returns
        -------
        m_hat, m1_hat, m0_hat : np.ndarray
            Fitted values and predictions at treatment 1 and 0.
        """
        a = np.asarray(treatment, dtype=float)
        m_hat = self.fit_predict(a, outcome, a)
        return m_hat, self.predict(np.ones_like(a)), self.predict(np.zeros_like(a))
