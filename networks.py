import torch.nn as nn
import torch.nn.functional as f
import gin

from envs.rubik.stickers import CUBE_SIZE

# one-hot channels per sticker cell: 6 colors x 6 faces
N_CHANNELS = 36


def small_init(layer, sd):
    if isinstance(layer, nn.Linear):
        nn.init.normal_(layer.weight, mean=0, std=sd)
        nn.init.zeros_(layer.bias)


def initialize_weights(m):
    if isinstance(m, nn.Linear):
        nn.init.kaiming_normal_(m.weight, nonlinearity='relu')
        if m.bias is not None:
            nn.init.zeros_(m.bias)


@gin.configurable
class TwistCostNet(nn.Module):
    """
    Estimates the number of twists left to reach a solved cube.

    Input is the `(B, 3, 3, 36)` encoding produced by
    `search.value_function.encode_stickers`, output is one value per state.
    """

    def __init__(self, input_size=N_CHANNELS, hidden_size=128, depth=8, last_sd=None):
        super(TwistCostNet, self).__init__()
        assert depth % 2 == 0, "We expect the depth to be divisible by 2"
        self.input_size = input_size
        self.input_layer = nn.Conv2d(in_channels=input_size,
                                     out_channels=hidden_size,
                                     kernel_size=(3, 3),
                                     stride=1,
                                     padding=1)
        self.first_ln = nn.BatchNorm2d(hidden_size)

        modules = []
        res = []
        lns = []
        lns_res = []
        for _ in range(depth // 2):
            modules.append(nn.Conv2d(hidden_size, hidden_size, kernel_size=(3, 3), stride=1, padding=1))
            lns.append(nn.BatchNorm2d(hidden_size))
            res.append(nn.Conv2d(hidden_size, hidden_size, kernel_size=(3, 3), stride=1, padding=1))
            lns_res.append(nn.BatchNorm2d(hidden_size))

        self.layers = nn.ModuleList(modules)
        self.res_layers = nn.ModuleList(res)
        self.lns = nn.ModuleList(lns)
        self.lns_res = nn.ModuleList(lns_res)

        self.output_layer = nn.Sequential(
            nn.AdaptiveAvgPool2d(1),
            nn.Flatten(),
            nn.Linear(in_features=hidden_size, out_features=1))

        for m in self.modules():
            initialize_weights(m)

        if last_sd is not None:
            small_init(self.output_layer[-1], last_sd)

    def forward(self, x):
        # (B, rows, cols, channels) -> (B, channels, rows, cols)
        x = x.permute(0, 3, 1, 2)
        x = f.relu(self.first_ln(self.input_layer(x)))

        for module, res, ln, ln_res in zip(self.layers, self.res_layers, self.lns, self.lns_res):
            delta = f.relu(ln(module(x)))
            x = ln_res(res(delta)) + x

        return self.output_layer(x).squeeze(-1)


@gin.configurable
class TwistCostDenseNet(nn.Module):
    """Same contract as `TwistCostNet` with residual dense layers over the flattened encoding."""

    def __init__(self, input_size=CUBE_SIZE * CUBE_SIZE * N_CHANNELS, hidden_size=256, depth=4, last_sd=None):
        super(TwistCostDenseNet, self).__init__()
        assert depth % 2 == 0, "We expect the depth to be divisible by 2"
        self.input_layer = nn.Linear(input_size, hidden_size)
        self.first_ln = nn.LayerNorm(hidden_size)

        modules = []
        res = []
        lns = []
        lns_res = []
        for _ in range(depth // 2):
            modules.append(nn.Linear(hidden_size, hidden_size))
            lns.append(nn.LayerNorm(hidden_size))
            res.append(nn.Linear(hidden_size, hidden_size))
            lns_res.append(nn.LayerNorm(hidden_size))

        self.layers = nn.ModuleList(modules)
        self.res_layers = nn.ModuleList(res)
        self.lns = nn.ModuleList(lns)
        self.lns_res = nn.ModuleList(lns_res)
        self.output_layer = nn.Linear(hidden_size, 1)

        for m in self.modules():
            initialize_weights(m)

        if last_sd is not None:
            small_init(self.output_layer, last_sd)

    def forward(self, x):
        x = x.flatten(start_dim=1)
        x = f.relu(self.first_ln(self.input_layer(x)))

        for module, res, ln, ln_res in zip(self.layers, self.res_layers, self.lns, self.lns_res):
            delta = f.relu(ln(module(x)))
            x = ln_res(res(delta)) + x

        return self.output_layer(x).squeeze(-1)
