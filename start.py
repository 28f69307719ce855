import argparse
import os

import numpy as np
from matplotlib import pyplot as plt

from kpca import config
from kpca.methods.kernel_pca import fit_kernel_pca, principal_variances, transform_training
from kpca.util.kernels import get_kernel
from kpca.util.logging_utils import setup_logger
import kpca.util.utils as ut


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Fit kernel PCA and save the training embedding")
    parser.add_argument("--data", default=None, help="csv file of row samples, synthetic circles if omitted")
    parser.add_argument("--kernel", default="rbf")
    parser.add_argument("--sigma", type=float, default=0.5)
    parser.add_argument("--components", type=int, default=2)
    parser.add_argument("--solver", default=config.SOLVER, choices=config.SOLVERS)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--out", default=str(config.DATA_DIR))
    parser.add_argument("--plot", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def plot_embedding(eigenvalues, Y, labels=None, save_path=None):
    fig, (var_ax, emb_ax) = plt.subplots(ncols=2, figsize=(10, 4))
    component_range = range(1, len(eigenvalues) + 1)
    var_ax.plot(component_range, np.cumsum(eigenvalues) / np.sum(eigenvalues), marker='o')
    var_ax.set_title("Cumulative principal variance")
    var_ax.set_xlabel("Component")
    if Y.shape[0] >= 2:
        emb_ax.scatter(Y[0], Y[1], c=labels, cmap='coolwarm', s=20, alpha=0.7)
        emb_ax.set_xlabel("Component 1")
        emb_ax.set_ylabel("Component 2")
    emb_ax.set_title("Kernel PCA embedding")
    if save_path:
        fig.savefig(save_path)
        plt.close(fig)
    else:
        plt.show()


def main(argv=None):
    args = parse_args(argv)
    logger = setup_logger("kpca")

    labels = None
    if args.data is None:
        X, labels = ut.make_circles(200, random_state=args.seed)
    else:
        X = ut.read_data(os.path.dirname(args.data) or ".", os.path.basename(args.data))
    logger.info("Loaded %d points of dimension %d", X.shape[1], X.shape[0])

    kernel_params = {"sigma": args.sigma} if args.kernel == "rbf" else {}
    kernel = get_kernel(args.kernel, **kernel_params)
    model = fit_kernel_pca(X, kernel=kernel, max_output_dim=args.components, solver=args.solver,
                           remove_zero_eig=True, random_state=args.seed, verbose=args.verbose)
    logger.info("Principal variances: %s", np.array2string(principal_variances(model), precision=4))

    Y = transform_training(model)
    ut.save_embedding(Y, results_path=args.out)

    if args.plot:
        plot_embedding(principal_variances(model), Y, labels)
    return model, Y


if __name__ == "__main__":
    main()
