#!/usr/bin/env python3
"""
Build a small workflow without the TUI and print its JSON export.
"""
from workflow_builder import NodeKind, WorkflowController


def main():
    controller = WorkflowController()

    researcher = controller.add(NodeKind.AGENT)
    controller.add(NodeKind.PARALLEL)
    controller.add(NodeKind.AGENT)

    controller.select(0)
    controller.rename("researcher")
    controller.connect(1)

    controller.select(2)
    controller.rename("writer")
    controller.registry.connect(controller.registry.node_at(1).id, controller.registry.selected_id)

    print(f"Built workflow starting at '{researcher.name}'")
    controller.export()


if __name__ == "__main__":
    main()
