"""
TSP Solver - Visualization Module
Plot tours and optimization progress.
"""

import matplotlib.pyplot as plt
from typing import List, Sequence
from tsp_core import City, Tour


class TSPVisualizer:
    """Visualize TSP tours and optimization progress."""

    def __init__(self, figsize=(12, 8)):
        self.figsize = figsize

    def plot_tour(
        self,
        tour: Tour,
        cities: Sequence[City],
        title: str = "TSP Tour",
        show_arrows: bool = True,
        save_path: str = None,
        show: bool = True
    ):
        """
        Plot a single tour as an open path.

        Args:
            tour: The tour to visualize
            cities: City list the tour's indices refer to
            title: Plot title
            show_arrows: Show direction arrows on edges
            save_path: Optional path to save the figure
            show: Open a window with the figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        visited = [cities[i] for i in tour.order]
        x_coords = [city.x for city in visited]
        y_coords = [city.y for city in visited]

        ax.scatter(x_coords, y_coords,
                   c='red', s=200, zorder=3, edgecolors='darkred', linewidth=2)
        ax.plot(x_coords, y_coords,
                'b-', linewidth=2, alpha=0.6, zorder=1)

        # Label cities by their index in the input
        for index in tour.order:
            city = cities[index]
            ax.annotate(str(index),
                        (city.x, city.y),
                        fontsize=9,
                        ha='center',
                        va='center',
                        color='white',
                        weight='bold')

        if show_arrows:
            for start, end in zip(visited, visited[1:]):
                mid_x = (start.x + end.x) / 2
                mid_y = (start.y + end.y) / 2
                dx = end.x - start.x
                dy = end.y - start.y
                ax.annotate('',
                            xy=(mid_x + dx*0.1, mid_y + dy*0.1),
                            xytext=(mid_x - dx*0.1, mid_y - dy*0.1),
                            arrowprops=dict(arrowstyle='->',
                                            color='blue',
                                            lw=2,
                                            alpha=0.7))

        # Highlight start city
        ax.scatter([visited[0].x], [visited[0].y],
                   c='green', s=300, zorder=4,
                   marker='*', edgecolors='darkgreen', linewidth=2)

        distance = tour.get_total_distance(cities)
        ax.set_title(f"{title}\nTotal Distance: {distance:.2f}",
                     fontsize=14, weight='bold')
        ax.set_xlabel('X Coordinate', fontsize=12)
        ax.set_ylabel('Y Coordinate', fontsize=12)
        ax.grid(True, alpha=0.3)
        ax.set_aspect('equal')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Tour saved to {save_path}")

        if show:
            plt.show()
        return fig

    def plot_convergence(
        self,
        history: List[float],
        title: str = "Convergence History",
        save_path: str = None,
        show: bool = True
    ):
        """
        Plot the best fitness after each generation.

        Args:
            history: Running-best fitness, starting with the initial population
            title: Plot title
            save_path: Optional path to save the figure
            show: Open a window with the figure
        """
        fig, ax = plt.subplots(figsize=(10, 6))

        generations = range(len(history))
        ax.plot(generations, history, 'b-', linewidth=2, label='Best Fitness')
        ax.fill_between(generations, history, alpha=0.3)

        initial = history[0]
        final = history[-1]
        improvement = ((final - initial) / initial) * 100

        ax.axhline(y=final, color='g', linestyle='--',
                   linewidth=1.5, label=f'Final: {final:.4f}')
        ax.axhline(y=initial, color='r', linestyle='--',
                   linewidth=1.5, label=f'Initial: {initial:.4f}')

        ax.set_xlabel('Generation', fontsize=12)
        ax.set_ylabel('Best Fitness', fontsize=12)
        ax.set_title(f"{title}\nImprovement: {improvement:.2f}%",
                     fontsize=14, weight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='lower right', fontsize=10)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Convergence plot saved to {save_path}")

        if show:
            plt.show()
        return fig
